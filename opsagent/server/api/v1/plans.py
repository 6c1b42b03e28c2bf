"""
Plans API Endpoints.

This module provides the operator interface to the agent: submitting requests,
observing the engine state and log, and deciding on the approval gate.

Conflicts with the engine state (busy engine, nothing to approve) are raised as
core errors and mapped to 409 by the registered exception handlers.
"""

from typing import List

from fastapi import APIRouter, HTTPException, status

from opsagent.agent_core.errors import AlreadyExecutingError
from opsagent.agent_core.log_sink import classify
from opsagent.agent_core.schemas.domain import ChatMessage, EngineState, Plan
from opsagent.core.logging_config import get_logger
from opsagent.server.schemas import ErrorDetail, LogLine, PlanSubmit
from opsagent.server.services.deps import AgentServiceDep

logger = get_logger(__name__)
router = APIRouter()


@router.post(
    "",
    response_model=Plan,
    status_code=status.HTTP_202_ACCEPTED,
    summary="Submit Request",
    description="Plan a natural-language request and start executing it.",
    response_description="The plan that was started.",
    responses={409: {"model": ErrorDetail, "description": "The agent is already planning or executing"}},
)
async def submit_plan(submission: PlanSubmit, service: AgentServiceDep):
    """
    Submit a request.

    Planning failures never surface here: the agent falls back to a single
    diagnostic CLI step instead.
    """
    if service.engine.is_busy:
        raise AlreadyExecutingError(service.current_state().plan.id if service.engine.is_executing else None)
    plan = await service.submit(submission.request)
    if plan is None:
        raise HTTPException(status_code=400, detail="Request was ignored")
    return plan


@router.get(
    "/state",
    response_model=EngineState,
    summary="Get Engine State",
    description="Retrieve a snapshot of the current plan, its step statuses and the cursor.",
)
async def get_state(service: AgentServiceDep):
    return service.current_state()


@router.post(
    "/approve",
    response_model=EngineState,
    summary="Approve Step",
    description="Approve the step waiting at the approval gate and resume execution.",
    responses={409: {"model": ErrorDetail, "description": "No step is awaiting approval"}},
)
async def approve_step(service: AgentServiceDep):
    await service.approve()
    return service.current_state()


@router.post(
    "/reject",
    response_model=EngineState,
    summary="Reject Step",
    description="Fail the current step and abandon the plan. Does nothing when no plan is executing.",
)
async def reject_step(service: AgentServiceDep):
    await service.reject()
    return service.current_state()


@router.get(
    "/logs",
    response_model=List[LogLine],
    summary="Get Operator Log",
    description="Retrieve the most recent operator log lines with their display severity.",
)
async def get_logs(service: AgentServiceDep):
    return [LogLine(line=line, level=classify(line)) for line in service.log_sink.lines()]


@router.get(
    "/messages",
    response_model=List[ChatMessage],
    summary="Get Chat Transcript",
    description="Retrieve the conversation between the operator and the agent.",
)
async def get_messages(service: AgentServiceDep):
    return service.messages
