from __future__ import annotations

from typing import Any, Mapping, Optional, Sequence, Union

from pydantic import Field

from ..errors import EmptyPlanError
from ..schemas.base import BaseSchema
from ..schemas.domain import AgentTool, Plan, PlanStep


class StepDraft(BaseSchema):
    tool: AgentTool
    description: str
    command: Optional[str] = Field(default=None, description="The specific CLI command, API call or browser goal")
    target_url: Optional[str] = Field(default=None, description="URL for browser steps")
    requires_approval: bool = False


DraftLike = Union[StepDraft, Mapping[str, Any]]


def _to_step(raw: DraftLike) -> PlanStep:
    draft = raw if isinstance(raw, StepDraft) else StepDraft.model_validate(dict(raw))
    return PlanStep(
        tool=draft.tool,
        description=draft.description,
        command=draft.command,
        target_url=draft.target_url if draft.tool == AgentTool.BROWSER else None,
        requires_approval=draft.requires_approval,
    )


def build_plan(drafts: Sequence[DraftLike], *, request: str = "") -> Plan:
    if not drafts:
        raise EmptyPlanError()
    return Plan(request=request, steps=[_to_step(d) for d in drafts])


def fallback_plan(request: str = "") -> Plan:
    return build_plan(
        [
            StepDraft(
                tool=AgentTool.CLI,
                description="Analyze request (Fallback Mode)",
                command="az account show",
                requires_approval=False,
            )
        ],
        request=request,
    )
