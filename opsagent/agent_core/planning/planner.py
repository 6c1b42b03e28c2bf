from __future__ import annotations

"""Structured planning for operator requests.

This module defines the planner gateway consumed by ``OpsAgentService``.

Responsibilities
----------------

- Convert a natural-language request into an ordered list of ``StepDraft``.
- Report every failure (missing model, transport, invalid output) as
  ``PlanningError`` so the control surface can fall back to a runnable plan.

The planner is intentionally constrained:

- It does not execute tools.
- It does not assign ids or statuses; ``build_plan`` does that.
- It does not enforce approvals; it only flags steps that need one.
"""

import logging
from typing import Any, List, Protocol

from pydantic_ai import Agent

from ..errors import PlanningError
from .steps import StepDraft

logger = logging.getLogger(__name__)

SYSTEM_PROMPT = """
You are a Principal DevOps Architect Agent.
Your goal is to parse natural language requests into a structured execution plan for a DevOps automation framework.

The framework has the following tools:
1. CLI: Use for speed and reliability when a command line exists (e.g. rotating keys, listing resources).
2. BROWSER: Use a browser agent for legacy UIs and flows that need visual verification. Set target_url.
3. NOTIFY: Use for notifications such as emails.
4. API: Use for direct API calls when simple.

SAFETY RULES:
- If a task implies modification or deletion (Rotate, Delete, Restart, Update), you MUST set requires_approval to true.
- Prefer CLI over BROWSER unless the task involves screenshots or visual verification.
- Always assume the user is authenticated.

Return the ordered list of steps.
"""


class PlannerGateway(Protocol):
    """Protocol for planner implementations."""

    async def generate(self, request_text: str) -> List[StepDraft]: ...


class StructuredPlanner:
    """Planner that asks a Pydantic AI model for structured step drafts.

    - ``model=None``: no planning backend is configured; ``generate`` raises
      ``PlanningError`` and the caller falls back.
    - ``model!=None``: runs a Pydantic AI agent with ``List[StepDraft]`` as its
      output type.
    """

    def __init__(self, *, model: Any | None = None, system_prompt: str = SYSTEM_PROMPT) -> None:
        """
        Initialize the planner.

        Args:
            model: A Pydantic AI model instance or model string (e.g. ``"google-gla:gemini-2.5-flash"``).
            system_prompt: Instructions describing the available tools and safety rules.
        """
        self._model = model
        self._system_prompt = system_prompt

    async def generate(self, request_text: str) -> List[StepDraft]:
        """Generate step drafts for a request.

        Raises
        ------
        PlanningError
            When no model is configured or the model call or its output fails.
        """
        if self._model is None:
            raise PlanningError("No planning model configured")

        try:
            agent: Agent = Agent(
                self._model,
                output_type=List[StepDraft],
                system_prompt=self._system_prompt,
            )
            result = await agent.run(request_text)
        except Exception as e:
            logger.warning(f"Planning request failed: {e}")
            raise PlanningError(str(e)) from e

        steps = list(result.output or [])
        logger.debug(f"Planner produced {len(steps)} step(s)")
        return steps
