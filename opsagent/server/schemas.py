"""
API Schemas.

This module contains Pydantic models used for API request bodies and response validation.
Engine snapshots and chat messages are returned as the core domain models.
"""

from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict, Field

from opsagent.agent_core.schemas.domain import LogLevel


class PlanSubmit(BaseModel):
    """
    Schema for submitting a new operator request.

    The request is planned and started immediately when the agent is idle.
    """

    request: str = Field(
        ...,
        min_length=1,
        description="The natural-language task for the agent to plan and execute.",
        examples=["Rotate the client secret for AppX and notify the owners."],
    )

    model_config = ConfigDict(json_schema_extra={"example": {"request": "List all resource groups in Prod-01"}})


class LogLine(BaseModel):
    """A single operator log line with its display severity."""

    line: str = Field(..., description="The raw log text.")
    level: LogLevel = Field(..., description="Severity derived from the line's content.")


class ErrorDetail(BaseModel):
    """Error body returned by the registered exception handlers."""

    detail: str = Field(..., description="Human-readable error message.")
    error_type: str = Field(..., description="Name of the error class.", examples=["AlreadyExecutingError"])
    error_id: Optional[str] = Field(None, description="Identifier of the logged failure, set for unhandled errors.")


class AgentHealth(BaseModel):
    """Liveness plus the agent's current phase."""

    status: Literal["ok"] = "ok"
    phase: Literal["idle", "thinking", "executing", "waiting_approval"]
    plan_id: Optional[str] = Field(None, description="Plan currently executing, if any.")
    step_index: Optional[int] = Field(None, description="Cursor of the executing plan.")
    log_lines: int = Field(..., description="Lines currently held by the operator log.")


class VersionInfo(BaseModel):
    name: str
    version: str
    schema_version: str = "v1"
