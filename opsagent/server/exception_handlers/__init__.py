"""
Exception handlers for the OpsAgent server.

Recoverable agent core errors map to 4xx through ``agent_error_handler``;
everything else is logged with an error id and returned as a 500.
"""

from fastapi import FastAPI

from opsagent.agent_core.errors import OpsAgentError

from .agent_handler import agent_error_handler
from .global_handler import unhandled_exception_handler


def setup_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(OpsAgentError, agent_error_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)


__all__ = ["agent_error_handler", "setup_exception_handlers", "unhandled_exception_handler"]
