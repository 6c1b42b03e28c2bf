from __future__ import annotations

import pytest
from pydantic import ValidationError

from opsagent.agent_core.errors import EmptyPlanError
from opsagent.agent_core.planning.steps import StepDraft, build_plan, fallback_plan
from opsagent.agent_core.schemas.domain import AgentTool, StepStatus


def test_build_plan_assigns_unique_ids_and_pending_status() -> None:
    plan = build_plan(
        [
            StepDraft(tool=AgentTool.CLI, description="list groups", command="az group list"),
            StepDraft(tool=AgentTool.NOTIFY, description="email owners", requires_approval=True),
        ],
        request="audit groups",
    )

    assert plan.request == "audit groups"
    assert [s.tool for s in plan.steps] == [AgentTool.CLI, AgentTool.NOTIFY]
    assert all(s.status == StepStatus.PENDING for s in plan.steps)
    assert len({s.id for s in plan.steps}) == 2
    assert plan.steps[1].requires_approval is True
    assert len(plan) == 2


def test_build_plan_preserves_order() -> None:
    drafts = [StepDraft(tool=AgentTool.API, description=f"call {i}") for i in range(5)]
    plan = build_plan(drafts)
    assert [s.description for s in plan.steps] == [f"call {i}" for i in range(5)]


def test_build_plan_accepts_gateway_dicts() -> None:
    plan = build_plan(
        [
            {
                "tool": "BROWSER",
                "description": "capture portal",
                "target_url": "https://portal.example.com",
                "requires_approval": False,
            }
        ]
    )
    step = plan.steps[0]
    assert step.tool == AgentTool.BROWSER
    assert step.target_url == "https://portal.example.com"


def test_build_plan_drops_target_url_for_non_browser_steps() -> None:
    plan = build_plan([{"tool": "CLI", "description": "x", "target_url": "https://ignored.example.com"}])
    assert plan.steps[0].target_url is None


def test_build_plan_rejects_empty_drafts() -> None:
    with pytest.raises(EmptyPlanError):
        build_plan([])


def test_build_plan_rejects_unknown_tool() -> None:
    with pytest.raises(ValidationError):
        build_plan([{"tool": "FTP", "description": "upload"}])


def test_step_draft_forbids_extra_fields() -> None:
    with pytest.raises(ValidationError):
        StepDraft.model_validate({"tool": "CLI", "description": "x", "status": "COMPLETED"})


def test_fallback_plan_is_single_cli_step_without_approval() -> None:
    plan = fallback_plan("anything")
    assert len(plan.steps) == 1
    step = plan.steps[0]
    assert step.tool == AgentTool.CLI
    assert step.requires_approval is False
    assert step.command == "az account show"
    assert step.status == StepStatus.PENDING
    assert plan.request == "anything"
