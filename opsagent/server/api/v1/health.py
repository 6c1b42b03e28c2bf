"""
Health Check Endpoints.

``/health`` doubles as a readiness view of the agent: besides liveness it
reports which phase the engine is in, so a deployment check can tell an idle
agent from one blocked on an approval gate.
"""

from fastapi import APIRouter

from opsagent.agent_core.schemas.domain import EngineState
from opsagent.server.core import constant
from opsagent.server.schemas import AgentHealth, VersionInfo
from opsagent.server.services.deps import AgentServiceDep

router = APIRouter()


def _phase(state: EngineState) -> str:
    if state.is_thinking:
        return "thinking"
    if state.is_waiting_approval:
        return "waiting_approval"
    if state.is_executing:
        return "executing"
    return "idle"


@router.get(
    "/health",
    response_model=AgentHealth,
    summary="Health Check",
    description="Report liveness and the agent's current phase.",
)
async def health_check(service: AgentServiceDep):
    state = service.current_state()
    executing = state.is_executing and state.plan is not None
    return AgentHealth(
        phase=_phase(state),
        plan_id=state.plan.id if executing else None,
        step_index=state.current_step_index if executing else None,
        log_lines=len(service.log_sink),
    )


@router.get("/version", response_model=VersionInfo, summary="Get Version")
async def version():
    return VersionInfo(name=constant.PROJECT_NAME, version=constant.VERSION)
