"""Orchestrator tests."""

import time

import pytest

from uismith.agents import (
    AccessibilityValidator,
    AgentAction,
    AgentRole,
    DesignCritic,
    DesignIssue,
    ExportError,
    Exporter,
    IssueCategory,
    IssueSeverity,
    Orchestrator,
    OrchestratorOptions,
    PipelineState,
    RuleBook,
    UserPreferences,
    create_orchestrator,
)
from uismith.agents.orchestrator import InvalidTransitionError, PipelineRun
from uismith.core import Settings
from uismith.monitoring import MetricsCollector


@pytest.fixture
def make_orchestrator(architect, critic, validator, exporter, settings, metrics):
    """Build an orchestrator, replacing any of the default parts."""

    def build(**overrides) -> Orchestrator:
        parts = {
            "architect": architect,
            "critic": critic,
            "validator": validator,
            "exporter": exporter,
            "options": OrchestratorOptions(),
            "settings": settings,
            "metrics": metrics,
        }
        parts.update(overrides)
        return Orchestrator(**parts)

    return build


def actions(result) -> list[AgentAction]:
    return [m.action for m in result.messages]


class SlowCritic(DesignCritic):
    def critique(self, spec):
        time.sleep(0.3)
        return super().critique(spec)


class BrokenCritic(DesignCritic):
    def critique(self, spec):
        raise RuntimeError("critic crashed")


class BrokenValidator(AccessibilityValidator):
    def validate(self, spec):
        raise RuntimeError("validator crashed")


class FailingExporter(Exporter):
    def __init__(self, error: Exception) -> None:
        super().__init__(enable_cache=False)
        self.error = error

    def export(self, spec, options=None):
        raise self.error


class CancellingCritic(DesignCritic):
    """Cancels its orchestrator while the critique runs."""

    target: Orchestrator | None = None

    def critique(self, spec):
        self.target.cancel()
        return super().critique(spec)


# ============================================================================
# Happy paths
# ============================================================================


@pytest.mark.unit
def test_pricing_request_runs_every_stage(orchestrator):
    result = orchestrator.process_request("Create a SaaS pricing page")

    assert result.success
    assert result.state == PipelineState.DONE
    assert result.errors == []
    assert result.specification.kinds() == ["PricingTable"]
    assert result.design_feedback.score == 100
    assert result.accessibility_report.passed
    assert result.export_package is not None
    assert actions(result) == [
        AgentAction.ANALYZE_REQUEST,
        AgentAction.CREATE_UI,
        AgentAction.VALIDATE_DESIGN,
        AgentAction.VALIDATE_ACCESSIBILITY,
        AgentAction.EXPORT_CODE,
    ]
    assert result.messages[0].source == AgentRole.USER
    assert result.conversation_id == orchestrator.get_context().conversation_id
    assert orchestrator.get_current_specification() is result.specification


@pytest.mark.unit
def test_design_improvements_adopted(orchestrator):
    result = orchestrator.process_request("Create a SaaS pricing page")
    assert result.specification.components[0].properties["size"] == "lg"


@pytest.mark.unit
def test_design_improvements_can_be_disabled(make_orchestrator):
    orchestrator = make_orchestrator(options=OrchestratorOptions(auto_apply_design_improvements=False))
    result = orchestrator.process_request("Create a SaaS pricing page")
    assert "size" not in result.specification.components[0].properties


@pytest.mark.unit
def test_skipped_stages(make_orchestrator):
    options = OrchestratorOptions(skip_design_review=True, export_on_success=False)
    result = make_orchestrator(options=options).process_request("asdf")

    assert result.success
    assert result.state == PipelineState.DONE
    assert result.design_feedback is None
    assert result.export_package is None
    assert actions(result) == [
        AgentAction.ANALYZE_REQUEST,
        AgentAction.CREATE_UI,
        AgentAction.VALIDATE_ACCESSIBILITY,
    ]


@pytest.mark.unit
def test_modify_flow_accumulates_history(orchestrator):
    first = orchestrator.process_request("Create a SaaS pricing page")
    second = orchestrator.modify_ui("add a chart")

    assert second.success
    assert second.specification.metadata.version == first.specification.metadata.version + 1
    assert second.specification.kinds() == ["PricingTable", "Chart"]
    assert actions(second)[len(first.messages) + 1] == AgentAction.MODIFY_UI
    assert first.specification.kinds() == ["PricingTable"]


@pytest.mark.unit
def test_result_messages_cover_whole_conversation(orchestrator):
    first = orchestrator.process_request("Create a SaaS pricing page")
    second = orchestrator.process_request("add a chart")

    assert len(first.messages) == 5
    assert len(second.messages) == 10
    assert second.messages == orchestrator.get_context().history
    assert second.messages[:5] == first.messages


@pytest.mark.unit
def test_critique_changes_bump_version(orchestrator):
    result = orchestrator.process_request("Create a SaaS pricing page")
    assert result.specification.metadata.version == 2


@pytest.mark.unit
def test_preferences_reach_generation(orchestrator):
    orchestrator.set_preferences(UserPreferences(style="minimal"))
    result = orchestrator.process_request("asdf")

    assert orchestrator.get_context().preferences.style == "minimal"
    assert result.specification.components[0].properties["variant"] == "outlined"


# ============================================================================
# Failures
# ============================================================================


@pytest.mark.unit
def test_accessibility_blocking_halts_before_export(orchestrator):
    result = orchestrator.process_request("Create an icon-only button")

    assert not result.success
    assert result.state == PipelineState.ERRORED
    assert result.export_package is None
    assert result.error_codes() == ["A11Y_BUTTON_NAME"]
    error = result.errors[0]
    assert error.fatal
    assert error.stage == AgentRole.ACCESSIBILITY
    assert len(error.details) == 1
    assert AgentAction.EXPORT_CODE not in actions(result)
    # Fixes are still adopted
    assert result.specification.components[1].properties["ariaLabel"] == "arrow-right button"


@pytest.mark.unit
def test_accessibility_fixes_can_be_disabled(make_orchestrator):
    orchestrator = make_orchestrator(options=OrchestratorOptions(auto_apply_accessibility_fixes=False))
    result = orchestrator.process_request("Create an icon-only button")

    assert result.state == PipelineState.ERRORED
    assert "ariaLabel" not in result.specification.components[1].properties


@pytest.mark.unit
def test_skipping_accessibility_removes_the_gate(make_orchestrator):
    result = make_orchestrator(options=OrchestratorOptions(skip_accessibility_check=True)).process_request(
        "Create an icon-only button"
    )

    assert result.success
    assert result.accessibility_report is None
    assert result.export_package is not None


@pytest.mark.unit
def test_generation_failure(orchestrator):
    result = orchestrator.process_request("   ")

    assert not result.success
    assert result.state == PipelineState.ERRORED
    assert result.specification is None
    assert result.error_codes() == ["UNCLASSIFIED_REQUEST"]
    assert result.errors[0].stage == AgentRole.UI_ARCHITECT
    assert actions(result) == [AgentAction.ANALYZE_REQUEST, AgentAction.CREATE_UI]
    assert orchestrator.get_current_specification() is None


@pytest.mark.unit
def test_request_too_long(make_orchestrator):
    orchestrator = make_orchestrator(settings=Settings(max_request_length=10))
    result = orchestrator.process_request("Create a SaaS pricing page")

    assert result.state == PipelineState.ERRORED
    assert result.error_codes() == ["INVALID_REQUEST"]
    assert result.errors[0].stage == AgentRole.ORCHESTRATOR
    assert actions(result) == [AgentAction.ANALYZE_REQUEST]


@pytest.mark.unit
def test_modify_without_current_specification(orchestrator):
    result = orchestrator.modify_ui("make it bigger")

    assert not result.success
    assert result.state == PipelineState.ERRORED
    assert result.error_codes() == ["NO_CURRENT_SPECIFICATION"]


@pytest.mark.unit
def test_blocking_critique_is_advisory(make_orchestrator):
    rules = RuleBook("strict")

    @rules.register("PricingTable")
    def _reject(component, index):
        yield DesignIssue(
            category=IssueCategory.HIERARCHY,
            severity=IssueSeverity.ERROR,
            message="Pricing tables are not allowed",
            component_index=index,
        )

    result = make_orchestrator(critic=DesignCritic(rules=rules)).process_request("Create a SaaS pricing page")

    assert result.success
    assert result.state == PipelineState.DONE
    assert result.error_codes() == ["DESIGN_ISSUES"]
    assert not result.errors[0].fatal
    assert result.errors[0].details
    # Blocked improvements are not applied
    assert "size" not in result.specification.components[0].properties
    assert result.export_package is not None


@pytest.mark.unit
def test_critic_crash_is_non_fatal(make_orchestrator):
    result = make_orchestrator(critic=BrokenCritic()).process_request("asdf")

    assert result.success
    assert result.error_codes() == ["INTERNAL_FAILURE"]
    assert result.errors[0].stage == AgentRole.DESIGN_CRITIC
    assert not result.errors[0].fatal
    assert result.design_feedback is None
    assert result.export_package is not None


@pytest.mark.unit
def test_validator_crash_is_fatal(make_orchestrator):
    result = make_orchestrator(validator=BrokenValidator()).process_request("asdf")

    assert not result.success
    assert result.state == PipelineState.ERRORED
    assert result.error_codes() == ["INTERNAL_FAILURE"]
    assert result.errors[0].fatal
    assert result.export_package is None


@pytest.mark.unit
@pytest.mark.parametrize(
    "error, code",
    [(ExportError("cannot render"), "EXPORT_FAILED"), (RuntimeError("disk full"), "INTERNAL_FAILURE")],
)
def test_export_failure_is_non_fatal(make_orchestrator, error, code):
    result = make_orchestrator(exporter=FailingExporter(error)).process_request("asdf")

    assert result.success
    assert result.state == PipelineState.DONE
    assert result.error_codes() == [code]
    assert result.errors[0].stage == AgentRole.EXPORT_ENGINEER
    assert result.export_package is None
    assert result.specification is not None


@pytest.mark.unit
def test_slow_stage_times_out(make_orchestrator):
    orchestrator = make_orchestrator(critic=SlowCritic(), settings=Settings(stage_timeout=0.15))
    result = orchestrator.process_request("asdf")

    assert result.error_codes() == ["STAGE_TIMEOUT"]
    assert result.errors[0].stage == AgentRole.DESIGN_CRITIC
    assert result.design_feedback is None
    assert result.success


@pytest.mark.unit
def test_cancel_stops_before_next_stage(make_orchestrator):
    critic = CancellingCritic()
    orchestrator = make_orchestrator(critic=critic)
    critic.target = orchestrator

    result = orchestrator.process_request("asdf")

    assert result.state == PipelineState.DONE
    assert result.error_codes() == ["CANCELLED"]
    assert not result.errors[0].fatal
    assert result.design_feedback is not None
    assert result.accessibility_report is None
    assert result.export_package is None
    assert result.success
    assert actions(result)[-1] == AgentAction.VALIDATE_DESIGN


@pytest.mark.unit
def test_cancel_flag_is_cleared_for_the_next_run(orchestrator):
    orchestrator.cancel()
    result = orchestrator.process_request("asdf")
    assert result.error_codes() == []


# ============================================================================
# Context, plans and metrics
# ============================================================================


@pytest.mark.unit
def test_reset_starts_new_conversation(orchestrator):
    orchestrator.process_request("asdf")
    old_id = orchestrator.get_context().conversation_id

    orchestrator.reset()

    context = orchestrator.get_context()
    assert context.conversation_id != old_id
    assert context.current_specification is None
    assert context.history == []


@pytest.mark.unit
def test_create_plan(orchestrator):
    plan = orchestrator.create_plan("Create a SaaS pricing page")

    assert plan.id.startswith("plan_")
    assert [s.agent for s in plan.steps] == [
        AgentRole.UI_ARCHITECT,
        AgentRole.DESIGN_CRITIC,
        AgentRole.ACCESSIBILITY,
        AgentRole.EXPORT_ENGINEER,
    ]
    assert [s.required for s in plan.steps] == [True, False, True, False]
    assert plan.steps[2].depends_on == [2]
    assert plan.estimated_duration_ms == 4000


@pytest.mark.unit
def test_create_plan_for_modification(make_orchestrator):
    orchestrator = make_orchestrator(options=OrchestratorOptions(skip_design_review=True, export_on_success=False))
    orchestrator.process_request("asdf")
    plan = orchestrator.create_plan("make it bigger")

    assert [s.action for s in plan.steps] == [AgentAction.MODIFY_UI, AgentAction.VALIDATE_ACCESSIBILITY]
    assert plan.estimated_duration_ms == 2000


@pytest.mark.unit
def test_metrics_recorded(orchestrator, metrics):
    orchestrator.process_request("asdf")
    orchestrator.process_request("Create an icon-only button")

    registry = metrics.registry
    assert registry.get_sample_value("uismith_pipeline_runs_total", {"status": "success"}) == 1.0
    assert registry.get_sample_value("uismith_pipeline_runs_total", {"status": "failure"}) == 1.0
    assert registry.get_sample_value("uismith_stage_duration_seconds_count", {"stage": "ui-architect"}) == 2.0


@pytest.mark.unit
def test_stage_failures_counted(make_orchestrator, metrics):
    make_orchestrator(critic=BrokenCritic()).process_request("asdf")
    sample = metrics.registry.get_sample_value(
        "uismith_stage_failures_total", {"stage": "design-critic", "code": "INTERNAL_FAILURE"}
    )
    assert sample == 1.0


@pytest.mark.unit
def test_invalid_transition_raises():
    run = PipelineRun("conv_test")
    run.advance(PipelineState.GENERATING)
    run.advance(PipelineState.DONE)

    with pytest.raises(InvalidTransitionError):
        run.advance(PipelineState.EXPORTING)


@pytest.mark.unit
def test_container_gives_each_conversation_its_own_orchestrator(di_container):
    first = di_container.get(Orchestrator)
    second = di_container.get(Orchestrator)

    assert first is not second
    assert first.architect is second.architect
    assert first.exporter is second.exporter
    assert first.get_context().conversation_id != second.get_context().conversation_id


@pytest.mark.unit
def test_container_shares_metrics_with_exporter(di_container):
    orchestrator = di_container.get(Orchestrator)

    assert orchestrator.exporter.metrics is orchestrator.metrics
    assert orchestrator.metrics is di_container.get(MetricsCollector)


@pytest.mark.unit
def test_create_orchestrator_applies_options():
    options = OrchestratorOptions(skip_design_review=True)
    orchestrator = create_orchestrator(options)

    assert orchestrator.options is options
    assert orchestrator.process_request("asdf").design_feedback is None


@pytest.mark.unit
def test_metrics_exposition(orchestrator, metrics):
    orchestrator.process_request("asdf")
    text = metrics.get_metrics().decode("utf-8")

    assert 'uismith_pipeline_runs_total{status="success"} 1.0' in text
    assert "uismith_uptime_seconds" in text
