"""
Orchestrator - sequences the pipeline stages for one conversation.

Generation -> Critique -> Validation -> Export, driven by an explicit
state table. Stage calls never raise across this boundary: every failure
becomes a StageError on the PipelineResult.
"""

import threading
import time
from collections.abc import Callable
from typing import Any, TypeVar

from returns.result import Failure, Result, Success, safe

from ..core.config import Settings, get_settings
from ..core.logging_config import LogContext, get_logger
from ..core.validate import validate_request
from ..monitoring.metrics import MetricsCollector, metrics_collector
from ..monitoring.tracer import trace_operation
from .accessibility import AccessibilityValidator, error_code
from .architect import RequestKind, UIArchitect
from .critic import DesignCritic
from .errors import ExportError
from .exporter import Exporter
from .models import (
    AgentAction,
    AgentRole,
    ConversationContext,
    OrchestrationPlan,
    OrchestratorOptions,
    PipelineMessage,
    PipelineResult,
    PipelineState,
    PlanStep,
    Specification,
    StageError,
    UserPreferences,
)

logger = get_logger(__name__)

T = TypeVar("T")

INVALID_REQUEST = "INVALID_REQUEST"
NO_CURRENT_SPECIFICATION = "NO_CURRENT_SPECIFICATION"
STAGE_TIMEOUT = "STAGE_TIMEOUT"
CANCELLED = "CANCELLED"
INTERNAL_FAILURE = "INTERNAL_FAILURE"
DESIGN_ISSUES = "DESIGN_ISSUES"
EXPORT_FAILED = "EXPORT_FAILED"

STEP_ESTIMATE_MS = 1000

TRANSITIONS: dict[PipelineState, frozenset[PipelineState]] = {
    PipelineState.IDLE: frozenset({PipelineState.GENERATING, PipelineState.DONE, PipelineState.ERRORED}),
    PipelineState.GENERATING: frozenset(
        {
            PipelineState.CRITIQUING,
            PipelineState.VALIDATING,
            PipelineState.EXPORTING,
            PipelineState.DONE,
            PipelineState.ERRORED,
        }
    ),
    PipelineState.CRITIQUING: frozenset({PipelineState.VALIDATING, PipelineState.EXPORTING, PipelineState.DONE}),
    PipelineState.VALIDATING: frozenset({PipelineState.EXPORTING, PipelineState.DONE, PipelineState.ERRORED}),
    PipelineState.EXPORTING: frozenset({PipelineState.DONE}),
    PipelineState.DONE: frozenset(),
    PipelineState.ERRORED: frozenset(),
}


class InvalidTransitionError(RuntimeError):
    """Attempted a state change the transition table does not allow."""

    def __init__(self, current: PipelineState, target: PipelineState) -> None:
        super().__init__(f"Invalid pipeline transition: {current.value} -> {target.value}")
        self.current = current
        self.target = target


class PipelineRun:
    """State of a single pass through the pipeline."""

    def __init__(self, conversation_id: str) -> None:
        self.result = PipelineResult(conversation_id=conversation_id)
        self.started = time.perf_counter()

    @property
    def state(self) -> PipelineState:
        return self.result.state

    def advance(self, target: PipelineState) -> None:
        if target not in TRANSITIONS[self.state]:
            raise InvalidTransitionError(self.state, target)
        logger.debug("state_transition", source=self.state.value, target=target.value)
        self.result.state = target

    def fail(self, error: StageError) -> None:
        self.result.errors.append(error)

    def adopt(self, spec: Specification) -> None:
        self.result.specification = spec


class Orchestrator:
    """
    Runs requests through the pipeline and owns the conversation context.

    One orchestrator serves one conversation; never share an instance
    between concurrent callers.
    """

    def __init__(
        self,
        architect: UIArchitect,
        critic: DesignCritic,
        validator: AccessibilityValidator,
        exporter: Exporter,
        options: OrchestratorOptions | None = None,
        settings: Settings | None = None,
        metrics: MetricsCollector | None = None,
    ) -> None:
        self.settings = settings or get_settings()
        self.architect = architect
        self.critic = critic
        self.validator = validator
        self.exporter = exporter
        self.options = options or OrchestratorOptions.from_settings(self.settings)
        self.metrics = metrics or metrics_collector
        self.context = ConversationContext()
        self._cancelled = threading.Event()

    # ========================================================================
    # Public surface
    # ========================================================================

    def process_request(self, text: str) -> PipelineResult:
        """
        Run a request through the full pipeline.

        The request creates a new specification or, when the conversation
        already has one and the text asks for changes, revises it.
        """
        return self._run(text, kind=None)

    def modify_ui(self, text: str) -> PipelineResult:
        """Revise the current specification; fails without one."""
        if self.context.current_specification is None:
            run = PipelineRun(self.context.conversation_id)
            run.fail(
                StageError(
                    stage=AgentRole.ORCHESTRATOR,
                    code=NO_CURRENT_SPECIFICATION,
                    message="No current specification to modify. Create a UI first.",
                    fatal=True,
                )
            )
            run.advance(PipelineState.ERRORED)
            return self._finish(run)
        return self._run(text, kind=RequestKind.MODIFY)

    def get_current_specification(self) -> Specification | None:
        return self.context.current_specification

    def get_context(self) -> ConversationContext:
        return self.context

    def set_preferences(self, preferences: UserPreferences) -> None:
        self.context.preferences = preferences

    def create_plan(self, text: str) -> OrchestrationPlan:
        """Steps the pipeline would run for ``text`` with the current options."""
        kind = self.architect.classify(text, self.context.current_specification is not None)
        action = AgentAction.MODIFY_UI if kind == RequestKind.MODIFY else AgentAction.CREATE_UI

        stages = [(AgentRole.UI_ARCHITECT, action, True)]
        if not self.options.skip_design_review:
            stages.append((AgentRole.DESIGN_CRITIC, AgentAction.VALIDATE_DESIGN, False))
        if not self.options.skip_accessibility_check:
            stages.append((AgentRole.ACCESSIBILITY, AgentAction.VALIDATE_ACCESSIBILITY, True))
        if self.options.export_on_success:
            stages.append((AgentRole.EXPORT_ENGINEER, AgentAction.EXPORT_CODE, False))

        steps = [
            PlanStep(
                order=order,
                agent=agent,
                action=step_action,
                depends_on=[order - 1] if order > 1 else [],
                required=required,
            )
            for order, (agent, step_action, required) in enumerate(stages, start=1)
        ]
        return OrchestrationPlan(steps=steps, estimated_duration_ms=STEP_ESTIMATE_MS * len(steps))

    def cancel(self) -> None:
        """Stop the run in progress before its next stage."""
        self._cancelled.set()

    def reset(self) -> None:
        """Drop the conversation and start a new one."""
        self.context = ConversationContext()
        self._cancelled.clear()
        logger.info("conversation_reset", conversation_id=self.context.conversation_id)

    # ========================================================================
    # Pipeline
    # ========================================================================

    def _run(self, text: str, kind: RequestKind | None) -> PipelineResult:
        self._cancelled.clear()
        run = PipelineRun(self.context.conversation_id)

        with LogContext(conversation_id=self.context.conversation_id):
            self._send(AgentRole.USER, AgentRole.ORCHESTRATOR, AgentAction.ANALYZE_REQUEST, request=text)

            match validate_request(text, self.settings.max_request_length):
                case Failure(problem):
                    run.fail(
                        StageError(
                            stage=AgentRole.ORCHESTRATOR,
                            code=INVALID_REQUEST,
                            message=problem.message,
                            fatal=True,
                        )
                    )
                    run.advance(PipelineState.ERRORED)
                    return self._finish(run)
                case Success(request):
                    text = request

            if not self._generate(run, text, kind):
                return self._finish(run)

            if not self.options.skip_design_review:
                if self._stop_if_cancelled(run, AgentRole.DESIGN_CRITIC):
                    return self._finish(run)
                self._critique(run)

            if not self.options.skip_accessibility_check:
                if self._stop_if_cancelled(run, AgentRole.ACCESSIBILITY):
                    return self._finish(run)
                if not self._validate(run):
                    return self._finish(run)

            if self.options.export_on_success:
                if self._stop_if_cancelled(run, AgentRole.EXPORT_ENGINEER):
                    return self._finish(run)
                self._export(run)

            run.advance(PipelineState.DONE)
            return self._finish(run)

    def _generate(self, run: PipelineRun, text: str, kind: RequestKind | None) -> bool:
        prior = self.context.current_specification
        if self._stop_if_cancelled(run, AgentRole.UI_ARCHITECT):
            return False

        run.advance(PipelineState.GENERATING)
        effective = kind or self.architect.classify(text, prior is not None)
        action = AgentAction.MODIFY_UI if effective == RequestKind.MODIFY else AgentAction.CREATE_UI
        self._send(AgentRole.ORCHESTRATOR, AgentRole.UI_ARCHITECT, action, request=text)

        outcome = self._invoke(
            AgentRole.UI_ARCHITECT,
            lambda: self.architect.generate(text, prior, self.context.preferences, kind=kind),
            fatal=True,
        )
        match outcome:
            case Failure(error):
                run.fail(error)
            case Success(Failure(generation_error)):
                run.fail(
                    StageError(
                        stage=AgentRole.UI_ARCHITECT,
                        code=generation_error.code.value,
                        message=generation_error.message,
                        fatal=True,
                    )
                )
            case Success(Success(spec)):
                self._adopt(run, spec)
                return True

        run.advance(PipelineState.ERRORED)
        return False

    def _critique(self, run: PipelineRun) -> None:
        spec = run.result.specification
        run.advance(PipelineState.CRITIQUING)
        self._send(
            AgentRole.ORCHESTRATOR,
            AgentRole.DESIGN_CRITIC,
            AgentAction.VALIDATE_DESIGN,
            specification_id=spec.id,
        )

        match self._invoke(AgentRole.DESIGN_CRITIC, lambda: self.critic.critique(spec.clone()), fatal=False):
            case Failure(error):
                run.fail(error)
            case Success(outcome):
                run.result.design_feedback = outcome.feedback
                if outcome.blocking:
                    run.fail(
                        StageError(
                            stage=AgentRole.DESIGN_CRITIC,
                            code=DESIGN_ISSUES,
                            message=f"Design review found {len(outcome.feedback.issues)} issue(s)",
                            details=[issue.model_dump(mode="json") for issue in outcome.feedback.issues],
                        )
                    )
                elif self.options.auto_apply_design_improvements:
                    self._adopt(run, outcome.improved_specification)

    def _validate(self, run: PipelineRun) -> bool:
        spec = run.result.specification
        run.advance(PipelineState.VALIDATING)
        self._send(
            AgentRole.ORCHESTRATOR,
            AgentRole.ACCESSIBILITY,
            AgentAction.VALIDATE_ACCESSIBILITY,
            specification_id=spec.id,
        )

        match self._invoke(AgentRole.ACCESSIBILITY, lambda: self.validator.validate(spec.clone()), fatal=True):
            case Failure(error):
                run.fail(error)
                run.advance(PipelineState.ERRORED)
                return False
            case Success(outcome):
                run.result.accessibility_report = outcome.report
                if self.options.auto_apply_accessibility_fixes:
                    self._adopt(run, outcome.fixed_specification)

                if not outcome.blocking:
                    return True

                critical = outcome.report.critical_violations
                run.fail(
                    StageError(
                        stage=AgentRole.ACCESSIBILITY,
                        code=error_code(critical[0].rule),
                        message="; ".join(v.description for v in critical),
                        fatal=True,
                        details=[v.model_dump(mode="json") for v in critical],
                    )
                )
                run.advance(PipelineState.ERRORED)
                return False

    def _export(self, run: PipelineRun) -> None:
        spec = run.result.specification
        export_options = self.options.export_options
        run.advance(PipelineState.EXPORTING)
        self._send(
            AgentRole.ORCHESTRATOR,
            AgentRole.EXPORT_ENGINEER,
            AgentAction.EXPORT_CODE,
            specification_id=spec.id,
            format=export_options.format.value,
        )

        outcome = self._invoke(
            AgentRole.EXPORT_ENGINEER,
            lambda: self.exporter.export(spec, export_options),
            fatal=False,
            expected=(ExportError,),
            failure_code=EXPORT_FAILED,
        )
        match outcome:
            case Failure(error):
                run.fail(error)
            case Success(package):
                run.result.export_package = package

    # ========================================================================
    # Helpers
    # ========================================================================

    def _invoke(
        self,
        stage: AgentRole,
        call: Callable[[], T],
        fatal: bool,
        expected: tuple[type[Exception], ...] = (),
        failure_code: str = INTERNAL_FAILURE,
    ) -> Result[T, StageError]:
        """
        Call one stage, converting exceptions and overruns to StageErrors.

        Exceptions of an ``expected`` type map to ``failure_code``; anything
        else is INTERNAL_FAILURE. A call that outlives ``stage_timeout``
        has its output discarded and fails with STAGE_TIMEOUT.
        """
        with trace_operation("stage", stage=stage.value) as span:
            outcome = safe(call)()
            elapsed = span.elapsed_ms / 1000
            span.record("succeeded", isinstance(outcome, Success))

        self.metrics.record_stage(stage.value, elapsed)

        match outcome:
            case Failure(exc):
                code = failure_code if isinstance(exc, expected) else INTERNAL_FAILURE
                logger.error("stage_failed", stage=stage.value, code=code, error=str(exc), exc_info=exc)
                return self._stage_failure(stage, code, str(exc), fatal)

        if elapsed > self.settings.stage_timeout:
            message = f"Stage took {elapsed:.3f}s, limit is {self.settings.stage_timeout}s"
            logger.warning("stage_timeout", stage=stage.value, elapsed=elapsed)
            return self._stage_failure(stage, STAGE_TIMEOUT, message, fatal)
        return outcome

    def _stage_failure(self, stage: AgentRole, code: str, message: str, fatal: bool) -> Failure[StageError]:
        self.metrics.record_stage_failure(stage.value, code)
        return Failure(StageError(stage=stage, code=code, message=message, fatal=fatal))

    def _stop_if_cancelled(self, run: PipelineRun, stage: AgentRole) -> bool:
        if not self._cancelled.is_set():
            return False
        logger.info("pipeline_cancelled", before=stage.value)
        run.fail(
            StageError(
                stage=AgentRole.ORCHESTRATOR,
                code=CANCELLED,
                message=f"Cancelled before {stage.value}",
            )
        )
        run.advance(PipelineState.DONE)
        return True

    def _adopt(self, run: PipelineRun, spec: Specification) -> None:
        run.adopt(spec)
        self.context.current_specification = spec

    def _send(
        self,
        source: AgentRole,
        destination: AgentRole,
        action: AgentAction,
        **payload: Any,
    ) -> None:
        self.context.history.append(
            PipelineMessage(source=source, destination=destination, action=action, payload=payload)
        )

    def _finish(self, run: PipelineRun) -> PipelineResult:
        result = run.result
        result.messages = list(self.context.history)
        result.success = result.specification is not None and not any(e.fatal for e in result.errors)

        duration = time.perf_counter() - run.started
        self.metrics.record_pipeline_run("success" if result.success else "failure", duration)
        logger.info(
            "pipeline_complete",
            state=result.state.value,
            success=result.success,
            errors=result.error_codes(),
            duration_ms=duration * 1000,
        )
        return result


# ============================================================================
# Convenience entry points
# ============================================================================


def create_orchestrator(options: OrchestratorOptions | None = None, settings: Settings | None = None) -> Orchestrator:
    """Build an orchestrator from the default container."""
    from ..core.container import create_container

    orchestrator = create_container(settings).get(Orchestrator)
    if options is not None:
        orchestrator.options = options
    return orchestrator


def generate_ui(text: str, options: OrchestratorOptions | None = None) -> PipelineResult:
    """One-shot helper: run ``text`` through a fresh orchestrator."""
    return create_orchestrator(options).process_request(text)
