from __future__ import annotations

"""Convenience factories for wiring the agent core.

This module contains small helpers to build the default executor registry,
the planner gateway, the ``ExecutionEngine`` and the ``OpsAgentService``
from ``Settings``.

The intent is to keep application wiring and tests concise, while still
allowing deployments to provide their own executors or planner.
"""

import logging
from typing import Any, Optional

from ..server.core.config import PlannerConfig, Settings
from .log_sink import LogSink
from .planning.planner import PlannerGateway, StructuredPlanner
from .runtime.engine import ExecutionEngine
from .runtime.executors import DEFAULT_STEP_DURATION, ExecutorRegistry, build_simulated_registry
from .service import OpsAgentService, OpsAgentServiceDeps

logger = logging.getLogger(__name__)


def build_default_executors(duration: float = DEFAULT_STEP_DURATION) -> ExecutorRegistry:
    """Build the default ``ExecutorRegistry`` (simulated work for every tool)."""
    return build_simulated_registry(duration)


def build_engine(
    *,
    executors: Optional[ExecutorRegistry] = None,
    duration: float = DEFAULT_STEP_DURATION,
    log_capacity: int = 100,
) -> ExecutionEngine:
    """Construct an ``ExecutionEngine`` with a fresh ``LogSink``."""
    return ExecutionEngine(
        executors=executors if executors is not None else build_default_executors(duration),
        log_sink=LogSink(capacity=log_capacity),
    )


def create_planner_model(config: PlannerConfig) -> Any | None:
    """Create the Gemini model used for planning, or ``None`` when no API key is configured."""
    if not config.enabled:
        logger.info("No GOOGLE_API_KEY configured; planning will use the fallback plan")
        return None

    from pydantic_ai.models.google import GoogleModel
    from pydantic_ai.providers.google import GoogleProvider

    logger.debug(f"Creating Google planning model: {config.model}")
    return GoogleModel(config.model, provider=GoogleProvider(api_key=config.api_key))


def build_planner(config: PlannerConfig) -> StructuredPlanner:
    return StructuredPlanner(model=create_planner_model(config))


def build_service(settings: Settings, *, planner: Optional[PlannerGateway] = None) -> OpsAgentService:
    """Wire engine, planner and control surface from application settings."""
    engine_cfg = settings.engine
    engine = build_engine(duration=engine_cfg.step_duration_seconds, log_capacity=engine_cfg.log_sink_capacity)
    return OpsAgentService(
        deps=OpsAgentServiceDeps(
            engine=engine,
            planner=planner if planner is not None else build_planner(settings.planner),
        )
    )
