"""Error types for the agent core.

Defines a small hierarchy of exceptions raised by the planner, the plan
builder and the execution engine. None of them is fatal to the process: the
control surface recovers from planning failures with a fallback plan, and the
engine reports misuse (second start, approve out of context) without touching
its state.
"""

from __future__ import annotations


class OpsAgentError(Exception):
    """Base error for all agent core exceptions."""


class PlanningError(OpsAgentError):
    """Raised by a planner gateway on any transport, configuration or parse failure."""


class EmptyPlanError(OpsAgentError):
    """Raised when a plan is built from zero steps."""

    def __init__(self) -> None:
        super().__init__("Planner produced an empty plan")


class AlreadyExecutingError(OpsAgentError):
    """Raised when a plan is started while another one is still active."""

    def __init__(self, plan_id: str | None = None) -> None:
        detail = f" (active plan: '{plan_id}')" if plan_id else ""
        super().__init__(f"A plan is already executing{detail}")


class NoStepAwaitingApprovalError(OpsAgentError):
    """Raised when approval is requested but no step sits at the approval gate."""

    def __init__(self) -> None:
        super().__init__("No step is awaiting approval")
