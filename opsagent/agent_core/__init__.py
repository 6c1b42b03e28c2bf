"""Core plan execution runtime for OpsAgent.

This package contains the "engine room" of the agent.

Design overview
---------------

- Planning turns an operator request into an ordered plan of steps, each bound
  to one ``AgentTool``. Steps that modify or delete things are flagged
  ``requires_approval``.
- Execution is performed by ``agent_core.runtime.ExecutionEngine``, an
  event-driven LangGraph state machine that runs exactly one step at a time
  and stops at the approval gate for flagged steps.
- ``agent_core.service.OpsAgentService`` is the operator's control surface:
  submit, approve, reject.

Typical usage
-------------

1. Build a service with ``agent_core.factory.build_service``.
2. ``await service.submit("Rotate secret for AppX")``.
3. Observe ``service.current_state()`` and ``service.log_sink.lines()``.
4. ``await service.approve()`` or ``await service.reject()`` at the gate.
"""

from .errors import (
    AlreadyExecutingError,
    EmptyPlanError,
    NoStepAwaitingApprovalError,
    OpsAgentError,
    PlanningError,
)
from .log_sink import LogSink
from .runtime import ExecutionEngine
from .schemas.domain import AgentTool, EngineState, Plan, PlanOutcome, PlanStep, StepStatus
from .service import OpsAgentService, OpsAgentServiceDeps

__all__ = [
    "AgentTool",
    "AlreadyExecutingError",
    "EmptyPlanError",
    "EngineState",
    "ExecutionEngine",
    "LogSink",
    "NoStepAwaitingApprovalError",
    "OpsAgentError",
    "OpsAgentService",
    "OpsAgentServiceDeps",
    "Plan",
    "PlanOutcome",
    "PlanStep",
    "PlanningError",
    "StepStatus",
]
