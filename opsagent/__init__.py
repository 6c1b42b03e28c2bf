"""OpsAgent.

This package turns an operator's natural-language DevOps request into an
ordered plan of tool-bound steps and runs it with a human approval gate.

High-level architecture
-----------------------

- ``opsagent.agent_core``:

  - Plan and step schemas.
  - A Pydantic AI planner gateway with a fallback plan.
  - A LangGraph-based execution engine that runs one step at a time and
    pauses at steps flagged as sensitive.
  - The control surface (submit / approve / reject) and a bounded operator log.

- ``opsagent.server``:

  - A FastAPI application exposing the control surface and engine snapshots.

Typical workflow
----------------

1. The operator submits a request.
2. The planner produces steps; planning failures fall back to a single CLI step.
3. The engine runs the plan; a sensitive step waits for approval.
4. Approval resumes the step; rejection abandons the plan.
"""
