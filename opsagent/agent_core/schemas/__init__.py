"""Schemas and DTOs for the agent core."""

from .domain import (
    AgentTool,
    ChatMessage,
    ChatRole,
    EngineState,
    LogLevel,
    Plan,
    PlanOutcome,
    PlanStep,
    StepStatus,
)

__all__ = [
    "AgentTool",
    "ChatMessage",
    "ChatRole",
    "EngineState",
    "LogLevel",
    "Plan",
    "PlanOutcome",
    "PlanStep",
    "StepStatus",
]
