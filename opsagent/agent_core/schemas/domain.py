from __future__ import annotations

from datetime import datetime, timezone
from enum import Enum
from typing import List, Optional
from uuid import uuid4

from pydantic import Field

from .base import BaseSchema


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


class AgentTool(str, Enum):
    CLI = "CLI"
    BROWSER = "BROWSER"
    NOTIFY = "NOTIFY"
    API = "API"


class StepStatus(str, Enum):
    PENDING = "PENDING"
    RUNNING = "RUNNING"
    WAITING_APPROVAL = "WAITING_APPROVAL"
    COMPLETED = "COMPLETED"
    FAILED = "FAILED"


ACTIVE_STATUSES = frozenset({StepStatus.RUNNING, StepStatus.WAITING_APPROVAL})


class PlanOutcome(str, Enum):
    completed = "completed"
    rejected = "rejected"
    failed = "failed"


class LogLevel(str, Enum):
    system = "system"
    info = "info"
    warning = "warning"
    error = "error"


class ChatRole(str, Enum):
    user = "user"
    assistant = "assistant"
    system = "system"


class PlanStep(BaseSchema):
    id: str = Field(default_factory=lambda: str(uuid4()))

    tool: AgentTool
    description: str
    command: Optional[str] = None
    target_url: Optional[str] = None

    requires_approval: bool = False
    status: StepStatus = StepStatus.PENDING

    @property
    def is_active(self) -> bool:
        return self.status in ACTIVE_STATUSES


class Plan(BaseSchema):
    id: str = Field(default_factory=lambda: str(uuid4()))
    request: str = ""
    steps: List[PlanStep]
    created_at: datetime = Field(default_factory=_utc_now)

    def __len__(self) -> int:
        return len(self.steps)


class EngineState(BaseSchema):
    """Read-only snapshot of the execution engine.

    ``current_step_index`` is ``None`` whenever the engine is idle. The plan of
    the last run stays attached after it finishes so observers can render the
    terminal statuses.
    """

    is_thinking: bool = False
    is_executing: bool = False
    plan: Optional[Plan] = None
    current_step_index: Optional[int] = None

    @property
    def active_step(self) -> Optional[PlanStep]:
        if self.plan is None or self.current_step_index is None:
            return None
        return self.plan.steps[self.current_step_index]

    @property
    def is_waiting_approval(self) -> bool:
        step = self.active_step
        return step is not None and step.status == StepStatus.WAITING_APPROVAL


class ChatMessage(BaseSchema):
    id: str = Field(default_factory=lambda: str(uuid4()))
    role: ChatRole
    content: str
    timestamp: datetime = Field(default_factory=_utc_now)
