from __future__ import annotations

"""Step executors and their registry.

An executor performs the *work* phase of a RUNNING step for one ``AgentTool``.
The engine resolves ``PlanStep.tool`` through an ``ExecutorRegistry`` and
awaits ``execute`` inside a cancellable task; the transition table does not
depend on which executor is registered.

Executors should:

- return operator log lines in ``ExecutionResult.logs``,
- signal a failed unit of work with ``ok=False`` (or by raising),
- never touch step status themselves (the engine owns it).

``SimulatedExecutor`` is the placeholder shipped with the project: it waits a
fixed duration and reports success.
"""

import asyncio
from dataclasses import dataclass, field
from typing import Dict, List, Protocol, Sequence

from ..schemas.domain import AgentTool, PlanStep

DEFAULT_STEP_DURATION = 3.5
SCREENSHOT_LOG = "> Screenshot captured."


@dataclass(frozen=True)
class ExecutionResult:
    """Structured executor result."""

    ok: bool
    logs: List[str] = field(default_factory=list)
    error: str | None = None


class StepExecutor(Protocol):
    """Protocol for step executor implementations."""

    tool: AgentTool

    async def execute(self, step: PlanStep) -> ExecutionResult: ...


class SimulatedExecutor:
    """Timed placeholder for real tool execution."""

    def __init__(
        self, tool: AgentTool, *, duration: float = DEFAULT_STEP_DURATION, extra_logs: Sequence[str] = ()
    ) -> None:
        if duration < 0:
            raise ValueError("duration must not be negative")
        self.tool = tool
        self.duration = duration
        self._extra_logs = list(extra_logs)

    async def execute(self, step: PlanStep) -> ExecutionResult:
        await asyncio.sleep(self.duration)
        return ExecutionResult(ok=True, logs=[f"Finished {step.tool.value} action.", *self._extra_logs])


class ExecutorRegistry:
    """
    In-memory mapping of tools to executor implementations.

    Notes:
        - ``register`` overwrites any existing mapping for the tool.
        - ``get`` will raise ``KeyError`` if the tool has no executor.
    """

    def __init__(self) -> None:
        """Initialize an empty executor registry."""
        self._executors: Dict[AgentTool, StepExecutor] = {}

    def register(self, executor: StepExecutor) -> None:
        """
        Register an executor implementation.

        Args:
            executor: The executor instance to register. It must expose a ``tool`` attribute.
        """
        self._executors[executor.tool] = executor

    def get(self, tool: AgentTool) -> StepExecutor:
        """
        Retrieve the executor registered for a tool.

        Raises:
            KeyError: If no executor is registered for the tool.
        """
        return self._executors[tool]

    def has(self, tool: AgentTool) -> bool:
        return tool in self._executors


def build_simulated_registry(duration: float = DEFAULT_STEP_DURATION) -> ExecutorRegistry:
    """Build a registry with a ``SimulatedExecutor`` for every tool.

    Browser steps additionally report a screenshot capture.
    """
    reg = ExecutorRegistry()
    for tool in AgentTool:
        extra = (SCREENSHOT_LOG,) if tool == AgentTool.BROWSER else ()
        reg.register(SimulatedExecutor(tool, duration=duration, extra_logs=extra))
    return reg
