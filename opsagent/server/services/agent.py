"""
Agent Service Provider.

Holds the process-wide ``OpsAgentService`` used by the API endpoints. Only one
plan runs at a time, so the whole server shares a single engine.
"""

from typing import Optional

from opsagent.agent_core.factory import build_service
from opsagent.agent_core.service import OpsAgentService
from opsagent.server.core.config import settings

# Global singleton
_service: Optional[OpsAgentService] = None


def get_agent_service() -> OpsAgentService:
    global _service
    if _service is None:
        _service = build_service(settings)
    return _service


def peek_agent_service() -> Optional[OpsAgentService]:
    """Return the singleton if it has been built, without building it."""
    return _service


async def shutdown_agent_service() -> None:
    """Release pending engine work and drop the singleton."""
    global _service
    if _service is not None:
        await _service.engine.shutdown()
        _service = None
