"""LangGraph-based execution runtime for plans.

 The runtime takes a plan (an ordered list of ``PlanStep``) and executes it
 with strong guarantees:

 - only one step is ``RUNNING`` or ``WAITING_APPROVAL`` at any time,
 - the cursor only moves forward, one step per completed step,
 - steps flagged ``requires_approval`` stop at the approval gate until the
   operator approves or rejects them.

 The main entry point is ``ExecutionEngine``. The work phase of a step is
 delegated to the per-tool executors in ``ExecutorRegistry``.
 """

from .engine import ExecutionEngine
from .executors import (
    ExecutionResult,
    ExecutorRegistry,
    SimulatedExecutor,
    StepExecutor,
    build_simulated_registry,
)

__all__ = [
    "ExecutionEngine",
    "ExecutionResult",
    "ExecutorRegistry",
    "SimulatedExecutor",
    "StepExecutor",
    "build_simulated_registry",
]
