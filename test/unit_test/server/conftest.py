from typing import Any, AsyncGenerator, List
from unittest.mock import patch

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from opsagent.agent_core.factory import build_engine
from opsagent.agent_core.planning import StepDraft
from opsagent.agent_core.schemas.domain import AgentTool
from opsagent.agent_core.service import OpsAgentService, OpsAgentServiceDeps


class StubPlanner:
    """Planner gateway returning whatever drafts the test configured."""

    def __init__(self) -> None:
        self.drafts: List[Any] = [StepDraft(tool=AgentTool.CLI, description="list resource groups")]
        self.error: Exception | None = None

    async def generate(self, request_text: str) -> List[Any]:
        if self.error is not None:
            raise self.error
        return list(self.drafts)


@pytest.fixture
def planner() -> StubPlanner:
    return StubPlanner()


@pytest_asyncio.fixture
async def service(planner: StubPlanner) -> AsyncGenerator[OpsAgentService, None]:
    svc = OpsAgentService(deps=OpsAgentServiceDeps(engine=build_engine(duration=0.01), planner=planner))
    yield svc
    await svc.engine.shutdown()


@pytest_asyncio.fixture(name="client")
async def client_fixture(service: OpsAgentService) -> AsyncGenerator[AsyncClient, None]:
    """Create an async HTTP client with mocked lifespan and an isolated agent service."""
    from opsagent.server.main import app
    from opsagent.server.services.agent import get_agent_service

    app.dependency_overrides[get_agent_service] = lambda: service

    async def mock_lifespan(app):
        yield

    with patch("opsagent.server.main.lifespan", mock_lifespan):
        async with AsyncClient(transport=ASGITransport(app=app), base_url="http://localhost") as client:
            yield client

    app.dependency_overrides.clear()
