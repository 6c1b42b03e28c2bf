from __future__ import annotations

"""LangGraph plan execution engine.

``ExecutionEngine`` runs a plan produced by the planning subsystem, one step at
a time.

Execution model
---------------

- The engine owns the plan, the cursor (``current_step_index``) and every
  step status. Nobody else mutates them.
- Each transition is applied by dispatching one event (``StepReady``,
  ``TimerFired``, ``Approved``, ``Rejected``) through a compiled LangGraph
  state machine. Dispatches are serialized by a single ``asyncio.Lock`` held
  only while a transition is applied.
- The graph decides *what* changes; the engine performs the resulting effect
  (schedule work, wait for approval, or wrap up) outside the graph.

Per-step state machine
----------------------

::

    PENDING -> RUNNING -> WAITING_APPROVAL -> RUNNING   (approve)
                       -> COMPLETED                     (work finished)
                       -> FAILED                        (reject / executor failure)

Suspension points
-----------------

- Work phase: a task awaiting the step's executor. ``reject()`` cancels it
  immediately. Each task carries a generation token; a completion whose token
  is stale is dropped, so a late completion cannot overwrite a rejection.
- Approval gate: ``WAITING_APPROVAL`` waits indefinitely for ``approve()`` or
  ``reject()``.
"""

import asyncio
import inspect
import logging
from typing import Any, Awaitable, Callable, Iterable, List, Optional, Union

from langgraph.graph import END, StateGraph

from ..errors import AlreadyExecutingError, EmptyPlanError, NoStepAwaitingApprovalError
from ..log_sink import LogSink
from ..schemas.domain import EngineState, Plan, PlanOutcome, PlanStep, StepStatus
from .executors import ExecutionResult, ExecutorRegistry
from .models import Approved, Effect, EngineEvent, Rejected, StepReady, TimerFired, _GraphState

logger = logging.getLogger(__name__)

FinishedListener = Callable[[PlanOutcome, EngineState], Union[None, Awaitable[None]]]

PAUSED_LOG = "> ⚠️ PAUSED: Step requires approval."
REJECTED_LOG = "> ❌ USER REJECTED STEP. ABORTING."
COMPLETE_LOG = "> WORKFLOW COMPLETE"


class ExecutionEngine:
    """Execute one plan at a time with an approval gate on sensitive steps.

    The engine delegates the work phase of a step to the executor registered
    for the step's tool in ``ExecutorRegistry`` and reports operator-facing
    events to a ``LogSink``.
    """

    def __init__(
        self,
        *,
        executors: ExecutorRegistry,
        log_sink: Optional[LogSink] = None,
        on_finished: Iterable[FinishedListener] = (),
    ) -> None:
        """
        Initialize the ExecutionEngine.

        Args:
            executors: Registry resolving a step's tool to its executor.
            log_sink: Sink for operator log lines. A fresh one is created when omitted.
            on_finished: Callables invoked (after the transition) whenever a plan reaches a terminal state.
        """
        self._executors = executors
        self._sink = log_sink if log_sink is not None else LogSink()
        self._listeners: List[FinishedListener] = list(on_finished)

        self._lock = asyncio.Lock()
        self._idle = asyncio.Event()
        self._idle.set()

        self._plan: Optional[Plan] = None
        self._cursor: Optional[int] = None
        self._is_thinking = False

        self._work_task: Optional[asyncio.Task[None]] = None
        self._generation = 0

        self._graph = self._build_graph()

    @property
    def log_sink(self) -> LogSink:
        return self._sink

    @property
    def is_executing(self) -> bool:
        return self._cursor is not None

    @property
    def is_busy(self) -> bool:
        return self._is_thinking or self.is_executing

    def add_listener(self, listener: FinishedListener) -> None:
        self._listeners.append(listener)

    def _build_graph(self):
        """Build and compile the LangGraph transition table."""
        g: StateGraph = StateGraph(_GraphState)
        g.add_node("step_ready", self._node_step_ready)
        g.add_node("approved", self._node_approved)
        g.add_node("work_done", self._node_work_done)
        g.add_node("rejected", self._node_rejected)
        g.add_node("await_approval", self._node_await_approval)
        g.add_node("schedule_work", self._node_schedule_work)
        g.add_node("advance", self._node_advance)
        g.add_node("finish", self._node_finish)
        g.add_node("fail", self._node_fail)

        g.set_conditional_entry_point(
            self._route_event,
            {
                "step_ready": "step_ready",
                "approved": "approved",
                "timer_fired": "work_done",
                "rejected": "rejected",
                "stale": END,
            },
        )

        g.add_conditional_edges(
            "step_ready",
            self._route_running,
            {"gate": "await_approval", "work": "schedule_work"},
        )
        g.add_conditional_edges(
            "approved",
            self._route_running,
            {"gate": "await_approval", "work": "schedule_work"},
        )
        g.add_conditional_edges(
            "work_done",
            self._route_after_work,
            {"next": "advance", "finish": "finish", "fail": "fail"},
        )
        g.add_edge("advance", "step_ready")
        g.add_edge("await_approval", END)
        g.add_edge("schedule_work", END)
        g.add_edge("finish", END)
        g.add_edge("fail", END)
        g.add_edge("rejected", END)
        return g.compile()

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def begin_thinking(self) -> None:
        """Enter the planning phase.

        Raises:
            AlreadyExecutingError: If the engine is already planning or executing.
        """
        if self.is_busy:
            raise AlreadyExecutingError(self._plan.id if self.is_executing and self._plan else None)
        self._is_thinking = True

    def end_thinking(self) -> None:
        self._is_thinking = False

    async def start(self, plan: Plan) -> None:
        """Load a plan and begin the step loop.

        The engine keeps its own copy of the plan; observe progress through
        ``current_state()``.

        Raises:
            AlreadyExecutingError: If another plan is still executing.
            EmptyPlanError: If the plan has no steps.
            ValueError: If any step is not ``PENDING``.
        """
        async with self._lock:
            if self.is_executing:
                raise AlreadyExecutingError(self._plan.id if self._plan else None)
            if not plan.steps:
                raise EmptyPlanError()
            if any(s.status != StepStatus.PENDING for s in plan.steps):
                raise ValueError("plan contains steps that are not PENDING")

            self._plan = plan.model_copy(deep=True)
            self._cursor = 0
            self._is_thinking = False
            self._idle.clear()
            logger.info(f"Starting plan {self._plan.id} with {len(self._plan)} step(s)")
            outcome = await self._dispatch(StepReady())
        await self._notify(outcome)

    async def approve(self) -> None:
        """Approve the step waiting at the approval gate.

        Raises:
            NoStepAwaitingApprovalError: If no step is in ``WAITING_APPROVAL``.
        """
        async with self._lock:
            step = self._active_step()
            if step is None or step.status != StepStatus.WAITING_APPROVAL:
                raise NoStepAwaitingApprovalError()
            outcome = await self._dispatch(Approved())
        await self._notify(outcome)

    async def reject(self) -> None:
        """Fail the current step and abandon the plan. No-op when idle."""
        async with self._lock:
            if not self.is_executing:
                logger.debug("Reject ignored: no plan is executing")
                return
            outcome = await self._dispatch(Rejected())
        await self._notify(outcome)

    def current_state(self) -> EngineState:
        """Return a deep-copied snapshot of the engine state."""
        return EngineState(
            is_thinking=self._is_thinking,
            is_executing=self.is_executing,
            plan=self._plan.model_copy(deep=True) if self._plan is not None else None,
            current_step_index=self._cursor,
        )

    async def wait_until_idle(self, timeout: Optional[float] = None) -> None:
        """Wait until no plan is executing."""
        await asyncio.wait_for(self._idle.wait(), timeout)

    async def shutdown(self) -> None:
        """Release pending work without emitting further events.

        Only the work task is cancelled and ``wait_until_idle`` waiters are
        released. The plan, the cursor and every step status are left as they
        were, so an interrupted plan still reports ``is_executing=True`` with
        its step ``RUNNING``. No further transition is applied to it.
        """
        async with self._lock:
            task = self._cancel_work()
            self._idle.set()
        if task is not None:
            await asyncio.gather(task, return_exceptions=True)
        logger.debug("Execution engine shut down")

    # ------------------------------------------------------------------
    # Dispatch and effects
    # ------------------------------------------------------------------

    async def _dispatch(self, event: EngineEvent) -> Optional[PlanOutcome]:
        """Apply one event. Must be called with the lock held."""
        assert self._plan is not None
        state: _GraphState = {
            "event": event,
            "plan": self._plan,
            "idx": self._cursor,
            "effect": None,
            "outcome": None,
        }
        result: Any = await self._graph.ainvoke(state)
        self._plan = result["plan"]
        self._cursor = result["idx"]

        effect = result["effect"]
        logger.debug(f"Applied {type(event).__name__}: idx={self._cursor} effect={effect}")
        if effect == Effect.schedule_work:
            self._schedule_work()
        elif effect in (Effect.finished, Effect.halted):
            self._cancel_work()
            self._idle.set()
        return result["outcome"]

    def _schedule_work(self) -> None:
        assert self._plan is not None and self._cursor is not None
        self._generation += 1
        step = self._plan.steps[self._cursor].model_copy()
        self._work_task = asyncio.create_task(self._run_work(self._generation, step))

    def _cancel_work(self) -> Optional[asyncio.Task[None]]:
        self._generation += 1
        task, self._work_task = self._work_task, None
        if task is not None and not task.done() and task is not asyncio.current_task():
            task.cancel()
            return task
        return None

    async def _run_work(self, token: int, step: PlanStep) -> None:
        try:
            executor = self._executors.get(step.tool)
            result = await executor.execute(step)
        except Exception as e:
            logger.error(f"Executor for {step.tool.value} failed on step {step.id}: {e}", exc_info=True)
            result = ExecutionResult(ok=False, error=f"{type(e).__name__}: {e}")

        async with self._lock:
            if not self.is_executing:
                logger.debug(f"Dropping completion for step {step.id}: no plan is executing")
                return
            if self._work_task is asyncio.current_task():
                self._work_task = None
            outcome = await self._dispatch(TimerFired(token=token, result=result))
        await self._notify(outcome)

    async def _notify(self, outcome: Optional[PlanOutcome]) -> None:
        if outcome is None:
            return
        snapshot = self.current_state()
        for listener in list(self._listeners):
            try:
                res = listener(outcome, snapshot)
                if inspect.isawaitable(res):
                    await res
            except Exception:
                logger.exception(f"Plan finished listener {listener!r} failed")

    def _active_step(self) -> Optional[PlanStep]:
        if self._plan is None or self._cursor is None:
            return None
        return self._plan.steps[self._cursor]

    def _emit(self, line: str) -> None:
        self._sink.append(line)

    # ------------------------------------------------------------------
    # Graph nodes
    # ------------------------------------------------------------------

    def _route_event(self, state: _GraphState) -> str:
        """Route the entry point by event kind."""
        event = state["event"]
        if isinstance(event, StepReady):
            return "step_ready"
        if isinstance(event, Approved):
            return "approved"
        if isinstance(event, TimerFired):
            if event.token != self._generation:
                logger.debug(f"Dropping stale completion (token={event.token}, current={self._generation})")
                return "stale"
            return "timer_fired"
        if isinstance(event, Rejected):
            return "rejected"
        raise ValueError(f"unknown engine event: {event!r}")

    async def _node_step_ready(self, state: _GraphState) -> _GraphState:
        """PENDING -> RUNNING for the step at the cursor."""
        step = state["plan"].steps[int(state["idx"])]
        step.status = StepStatus.RUNNING
        return state

    async def _node_approved(self, state: _GraphState) -> _GraphState:
        """WAITING_APPROVAL -> RUNNING, clearing the approval flag."""
        idx = int(state["idx"])
        step = state["plan"].steps[idx]
        step.requires_approval = False
        step.status = StepStatus.RUNNING
        self._emit(f"> ✅ USER APPROVED STEP {idx + 1}")
        return state

    def _route_running(self, state: _GraphState) -> str:
        step = state["plan"].steps[int(state["idx"])]
        return "gate" if step.requires_approval else "work"

    async def _node_await_approval(self, state: _GraphState) -> _GraphState:
        step = state["plan"].steps[int(state["idx"])]
        step.status = StepStatus.WAITING_APPROVAL
        self._emit(PAUSED_LOG)
        state["effect"] = Effect.await_approval
        return state

    async def _node_schedule_work(self, state: _GraphState) -> _GraphState:
        state["effect"] = Effect.schedule_work
        return state

    async def _node_work_done(self, state: _GraphState) -> _GraphState:
        """Record the executor result on the running step."""
        event = state["event"]
        assert isinstance(event, TimerFired)
        if event.result.ok:
            step = state["plan"].steps[int(state["idx"])]
            step.status = StepStatus.COMPLETED
            for line in event.result.logs:
                self._emit(line)
        return state

    def _route_after_work(self, state: _GraphState) -> str:
        event = state["event"]
        assert isinstance(event, TimerFired)
        if not event.result.ok:
            return "fail"
        if int(state["idx"]) + 1 >= len(state["plan"].steps):
            return "finish"
        return "next"

    async def _node_advance(self, state: _GraphState) -> _GraphState:
        state["idx"] = int(state["idx"]) + 1
        return state

    async def _node_finish(self, state: _GraphState) -> _GraphState:
        state["idx"] = None
        state["effect"] = Effect.finished
        state["outcome"] = PlanOutcome.completed
        self._emit(COMPLETE_LOG)
        return state

    async def _node_fail(self, state: _GraphState) -> _GraphState:
        """Executor failure: terminal for the step and for the plan."""
        event = state["event"]
        assert isinstance(event, TimerFired)
        idx = int(state["idx"])
        step = state["plan"].steps[idx]
        step.status = StepStatus.FAILED
        for line in event.result.logs:
            self._emit(line)
        self._emit(f"ERROR: step {idx + 1} ({step.tool.value}) failed: {event.result.error or 'unknown error'}")
        state["idx"] = None
        state["effect"] = Effect.halted
        state["outcome"] = PlanOutcome.failed
        return state

    async def _node_rejected(self, state: _GraphState) -> _GraphState:
        step = state["plan"].steps[int(state["idx"])]
        step.status = StepStatus.FAILED
        self._emit(REJECTED_LOG)
        state["idx"] = None
        state["effect"] = Effect.halted
        state["outcome"] = PlanOutcome.rejected
        return state
