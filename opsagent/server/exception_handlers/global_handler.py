"""
Unhandled Exception Handler.

Anything that escapes a route without being an ``OpsAgentError`` is a server
bug. The response carries only an opaque ``error_id``; the matching log record
carries the traceback, the request line and what the engine was doing at the
time, since most failures here happen mid-plan.
"""

from typing import Any, Dict
from uuid import uuid4

from fastapi import Request
from fastapi.responses import JSONResponse

from opsagent.core.logging_config import get_logger
from opsagent.server.schemas import ErrorDetail
from opsagent.server.services.agent import peek_agent_service

logger = get_logger(__name__)


def _engine_context() -> Dict[str, Any]:
    service = peek_agent_service()
    if service is None:
        return {"plan_id": None, "step_index": None}
    state = service.current_state()
    return {
        "plan_id": state.plan.id if state.is_executing and state.plan else None,
        "step_index": state.current_step_index,
    }


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    error_id = uuid4().hex[:12]
    context = {
        "error_id": error_id,
        "error_type": type(exc).__name__,
        "method": request.method,
        "path": request.url.path,
        "client": request.client.host if request.client else None,
        **_engine_context(),
    }
    logger.error(
        f"Unhandled {context['error_type']} [{error_id}] on {request.method} {request.url.path} "
        f"(plan={context['plan_id']}, step={context['step_index']})",
        exc_info=exc,
        extra=context,
    )
    body = ErrorDetail(detail="Internal server error", error_type=context["error_type"], error_id=error_id)
    return JSONResponse(status_code=500, content=body.model_dump())
