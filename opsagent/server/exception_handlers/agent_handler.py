"""
Agent Error Handler.

Maps the recoverable agent core errors to HTTP responses. Conflicts with the
engine state (busy engine, nothing to approve) become 409; anything else in
the hierarchy becomes 400.
"""

from fastapi import Request
from fastapi.responses import JSONResponse

from opsagent.agent_core.errors import AlreadyExecutingError, NoStepAwaitingApprovalError
from opsagent.core.logging_config import get_logger
from opsagent.server.schemas import ErrorDetail

logger = get_logger(__name__)

_CONFLICTS = (AlreadyExecutingError, NoStepAwaitingApprovalError)


async def agent_error_handler(request: Request, exc: Exception) -> JSONResponse:
    status_code = 409 if isinstance(exc, _CONFLICTS) else 400
    logger.info(f"{request.method} {request.url.path} rejected: {type(exc).__name__}: {exc}")
    return JSONResponse(
        status_code=status_code,
        content=ErrorDetail(detail=str(exc), error_type=type(exc).__name__).model_dump(exclude_none=True),
    )
