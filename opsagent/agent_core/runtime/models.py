from __future__ import annotations

"""Engine events and LangGraph state types.

The engine is an event-driven state machine. Every transition is triggered by
exactly one event from a closed set:

- ``StepReady``: the step at the cursor has just become the target.
- ``TimerFired``: the work phase of the running step finished. Its ``token``
  is the work generation it was scheduled under; the graph routes a stale
  token straight to END.
- ``Approved``: the operator approved the gated step.
- ``Rejected``: the operator rejected the current step.

``_GraphState`` is the state passed between LangGraph nodes while one event is
being applied. It only lives for the duration of a single dispatch.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional, Required, TypedDict, Union

from ..schemas.domain import Plan, PlanOutcome
from .executors import ExecutionResult


@dataclass(frozen=True)
class StepReady:
    pass


@dataclass(frozen=True)
class TimerFired:
    token: int
    result: ExecutionResult


@dataclass(frozen=True)
class Approved:
    pass


@dataclass(frozen=True)
class Rejected:
    pass


EngineEvent = Union[StepReady, TimerFired, Approved, Rejected]


class Effect(str, Enum):
    """What the engine must do once a dispatch has been applied."""

    schedule_work = "schedule_work"
    await_approval = "await_approval"
    finished = "finished"
    halted = "halted"


class _GraphState(TypedDict):
    """Mutable LangGraph state for a single event dispatch.

    - ``event``: the event being applied.
    - ``plan``: the plan under execution; step statuses are updated in place.
    - ``idx``: the cursor; ``None`` once the plan leaves the executing phase.
    - ``effect``: set by the last node to tell the engine what to do next.
    - ``outcome``: terminal outcome of the plan, when the dispatch ended it.
    """

    event: Required[EngineEvent]
    plan: Required[Plan]
    idx: Required[Optional[int]]
    effect: Required[Optional[Effect]]
    outcome: Required[Optional[PlanOutcome]]
