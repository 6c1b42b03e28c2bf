from __future__ import annotations

"""High-level control surface for the operator.

``OpsAgentService`` is the only mutation path the operator has into the
engine:

- ``submit``:

  1. Ignores blank requests and requests made while the engine is busy.
  2. Enters the thinking phase and asks the planner gateway for step drafts.
  3. Builds the plan, falling back to a single CLI step on any planning
     failure, and starts it on the engine.

- ``approve`` / ``reject``: act on the currently gated step.

The service also keeps the chat transcript shown next to the plan.
``OpsAgentService`` is intentionally thin: execution semantics live in the
engine.
"""

import logging
from dataclasses import dataclass
from typing import List, Optional

from pydantic import ValidationError

from .errors import EmptyPlanError, PlanningError
from .log_sink import LogSink
from .planning.planner import PlannerGateway
from .planning.steps import build_plan, fallback_plan
from .runtime.engine import ExecutionEngine
from .schemas.domain import ChatMessage, ChatRole, EngineState, Plan, PlanOutcome

logger = logging.getLogger(__name__)

GREETING = "OpsAgent Online. Ready for instructions."
COMPLETED_MESSAGE = "✅ All tasks completed."


@dataclass(frozen=True)
class OpsAgentServiceDeps:
    """Dependency bundle for ``OpsAgentService``."""

    engine: ExecutionEngine
    planner: PlannerGateway


class OpsAgentService:
    """Plan and execute operator requests, one at a time."""

    def __init__(self, *, deps: OpsAgentServiceDeps) -> None:
        self._engine = deps.engine
        self._planner = deps.planner
        self._messages: List[ChatMessage] = [ChatMessage(role=ChatRole.assistant, content=GREETING)]
        self._engine.add_listener(self._on_plan_finished)

    @property
    def engine(self) -> ExecutionEngine:
        return self._engine

    @property
    def log_sink(self) -> LogSink:
        return self._engine.log_sink

    @property
    def messages(self) -> List[ChatMessage]:
        return list(self._messages)

    def current_state(self) -> EngineState:
        return self._engine.current_state()

    async def submit(self, text: str) -> Optional[Plan]:
        """Plan and start a request.

        Returns
        -------
        Plan | None
            A snapshot of the started plan, or ``None`` when the request was
            ignored (blank text, or the agent is busy).
        """
        request = text.strip()
        if not request:
            return None
        if self._engine.is_busy:
            logger.info("Submit ignored: agent is busy")
            return None

        self._engine.begin_thinking()
        try:
            self._messages.append(ChatMessage(role=ChatRole.user, content=request))
            self.log_sink.append(f'> Received input: "{request}"')

            plan = await self._generate_plan(request)
            self.log_sink.append(f"> Plan generated: {len(plan)} steps identified.")
            await self._engine.start(plan)
        finally:
            self._engine.end_thinking()

        return self._engine.current_state().plan

    async def approve(self) -> None:
        await self._engine.approve()

    async def reject(self) -> None:
        await self._engine.reject()

    async def _generate_plan(self, request: str) -> Plan:
        try:
            drafts = await self._planner.generate(request)
            return build_plan(drafts, request=request)
        except (PlanningError, EmptyPlanError, ValidationError) as e:
            logger.warning(f"Planning failed, using fallback plan: {e}")
            return self._fallback(request, e)
        except Exception as e:
            logger.exception(f"Planner gateway raised {type(e).__name__}, using fallback plan")
            return self._fallback(request, e)

    def _fallback(self, request: str, error: Exception) -> Plan:
        self.log_sink.append(f"WARNING: Planning failed ({type(error).__name__}); running fallback plan.")
        return fallback_plan(request)

    def _on_plan_finished(self, outcome: PlanOutcome, state: EngineState) -> None:
        if outcome == PlanOutcome.completed:
            self._messages.append(ChatMessage(role=ChatRole.assistant, content=COMPLETED_MESSAGE))
