"""
Agent Service Dependency.

Provides the singleton ``OpsAgentService`` to API endpoints.
"""

from typing import Annotated

from fastapi import Depends

from opsagent.agent_core.service import OpsAgentService
from opsagent.server.services.agent import get_agent_service

AgentServiceDep = Annotated[OpsAgentService, Depends(get_agent_service)]
