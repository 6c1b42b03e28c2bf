"""Planning components.

 The planning subsystem turns an operator request into a *plan*: an ordered
 list of steps, each bound to one ``AgentTool``.

 - ``StructuredPlanner`` is the planner gateway. It returns ``StepDraft``
   objects and signals any failure as ``PlanningError``.
 - ``build_plan`` assigns ids and the initial ``PENDING`` status, and refuses
   empty plans.

 The planner itself does not execute tools; plans are consumed by
 ``opsagent.agent_core.runtime.ExecutionEngine``.
 """

from .planner import PlannerGateway, StructuredPlanner
from .steps import StepDraft, build_plan, fallback_plan

__all__ = [
    "PlannerGateway",
    "StepDraft",
    "StructuredPlanner",
    "build_plan",
    "fallback_plan",
]
