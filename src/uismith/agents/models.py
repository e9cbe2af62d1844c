"""UI Specification Data Models."""

import copy
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, JsonValue
from returns.result import Failure

from ..core.config import Settings
from ..core.hash import hash_string
from ..core.id import new_conversation_id, new_message_id, new_plan_id, new_specification_id
from ..core.json import JSONParseError, extract_json, safe_json_dumps
from ..core.validate import validate_specification
from .errors import SpecificationFormatError


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


PropertyValue = JsonValue
"""string | number | boolean | list | mapping (null tolerated, skipped on export)"""


# ============================================================================
# Enumerations
# ============================================================================


class AgentRole(str, Enum):
    """Participants in a pipeline conversation."""

    ORCHESTRATOR = "orchestrator"
    UI_ARCHITECT = "ui-architect"
    DESIGN_CRITIC = "design-critic"
    ACCESSIBILITY = "accessibility"
    EXPORT_ENGINEER = "export-engineer"
    USER = "user"


class AgentAction(str, Enum):
    ANALYZE_REQUEST = "ANALYZE_REQUEST"
    CREATE_UI = "CREATE_UI"
    MODIFY_UI = "MODIFY_UI"
    VALIDATE_DESIGN = "VALIDATE_DESIGN"
    VALIDATE_ACCESSIBILITY = "VALIDATE_ACCESSIBILITY"
    EXPORT_CODE = "EXPORT_CODE"


class IssueCategory(str, Enum):
    SPACING = "spacing"
    HIERARCHY = "hierarchy"
    CONTRAST = "contrast"
    ALIGNMENT = "alignment"
    CONSISTENCY = "consistency"


class IssueSeverity(str, Enum):
    ERROR = "error"
    WARNING = "warning"
    SUGGESTION = "suggestion"


class Impact(str, Enum):
    """Accessibility violation impact, most severe first."""

    CRITICAL = "critical"
    SERIOUS = "serious"
    MODERATE = "moderate"
    MINOR = "minor"


class FileType(str, Enum):
    COMPONENT = "component"
    STYLE = "style"
    CONFIG = "config"
    DOCUMENT = "document"


class ExportFormat(str, Enum):
    REACT = "react"
    JSON = "json"
    TREE = "tree"
    STORYBOOK = "storybook"
    FULL = "full"


class PipelineState(str, Enum):
    IDLE = "idle"
    GENERATING = "generating"
    CRITIQUING = "critiquing"
    VALIDATING = "validating"
    EXPORTING = "exporting"
    DONE = "done"
    ERRORED = "errored"


# ============================================================================
# Specification
# ============================================================================


class ComponentMetadata(BaseModel):
    """Why a component was chosen (informational only)."""

    reason: str | None = None
    alternatives: list[str] = Field(default_factory=list)


class ComponentNode(BaseModel):
    """One component instance in a specification."""

    kind: str = Field(..., min_length=1, description="Component kind name")
    properties: dict[str, PropertyValue] = Field(default_factory=dict)
    metadata: ComponentMetadata | None = None


class LayoutHints(BaseModel):
    arrangement: Literal["stack", "grid", "flex", "custom"] = "stack"
    spacing: str | None = None
    max_width: str | None = None


class SpecificationMetadata(BaseModel):
    version: int = Field(default=1, ge=1)
    created_at: datetime = Field(default_factory=utcnow)
    updated_at: datetime = Field(default_factory=utcnow)


class Specification(BaseModel):
    """Complete UI specification threaded through the pipeline.

    Components are kept in rendering order. Stages never share an
    instance: each one works on a ``clone()`` and hands back a new value.
    """

    id: str = Field(default_factory=new_specification_id)
    name: str = "Generated UI"
    description: str = ""
    components: list[ComponentNode] = Field(default_factory=list)
    layout: LayoutHints | None = None
    metadata: SpecificationMetadata = Field(default_factory=SpecificationMetadata)

    def clone(self) -> "Specification":
        """Fully independent deep copy."""
        return self.model_copy(deep=True)

    def revise(self) -> "Specification":
        """Clone as the next version: new id, version + 1, fresh updated_at."""
        revised = self.clone()
        revised.id = new_specification_id()
        revised.metadata.version = self.metadata.version + 1
        revised.metadata.updated_at = utcnow()
        return revised

    def apply_patch(self, index: int, patch: dict[str, Any]) -> bool:
        """
        Shallow-merge a property patch into one component, in place.

        Patch values are deep-copied so the caller's map stays untouched.
        An index outside ``[0, len(components))`` is a no-op; negative
        indexes are out of range, not counted from the end.

        Returns:
            True if any property value changed
        """
        if not 0 <= index < len(self.components):
            return False
        properties = self.components[index].properties
        if all(key in properties and properties[key] == value for key, value in patch.items()):
            return False
        properties.update(copy.deepcopy(patch))
        return True

    def kinds(self) -> list[str]:
        return [c.kind for c in self.components]

    def fingerprint(self) -> str:
        """Content hash that ignores id, version and timestamps."""
        content = self.model_dump(mode="json", exclude={"id", "metadata"})
        return hash_string(safe_json_dumps(content, sort_keys=True))

    def to_json(self) -> str:
        return safe_json_dumps(self.model_dump(mode="json"), indent=2)

    @classmethod
    def from_json(cls, text: str) -> "Specification":
        """
        Parse a specification from (possibly messy) JSON text.

        Raises:
            SpecificationFormatError: If the text is not a usable specification
        """
        try:
            data = extract_json(text)
        except JSONParseError as e:
            raise SpecificationFormatError(str(e)) from e

        match validate_specification(data, text):
            case Failure(problem):
                raise SpecificationFormatError(problem.message)

        try:
            return cls.model_validate(data)
        except ValueError as e:
            raise SpecificationFormatError(f"Invalid specification: {e}") from e


# ============================================================================
# Critique
# ============================================================================


class DesignIssue(BaseModel):
    category: IssueCategory
    severity: IssueSeverity
    message: str
    component_index: int | None = None
    fix: ComponentNode | None = None
    detail: str | None = Field(default=None, description="Background from capability providers")


class DesignImprovement(BaseModel):
    component_index: int
    suggestion: str
    proposed_properties: dict[str, PropertyValue] | None = None


class DesignFeedback(BaseModel):
    score: int = Field(..., ge=0, le=100)
    issues: list[DesignIssue] = Field(default_factory=list)
    improvements: list[DesignImprovement] = Field(default_factory=list)

    def count(self, severity: IssueSeverity) -> int:
        return sum(1 for issue in self.issues if issue.severity == severity)


class CritiqueOutcome(BaseModel):
    """Result of one critique pass."""

    feedback: DesignFeedback
    improved_specification: Specification

    @property
    def blocking(self) -> bool:
        return self.feedback.count(IssueSeverity.ERROR) > 0


# ============================================================================
# Accessibility
# ============================================================================


class AccessibilityViolation(BaseModel):
    rule: str
    impact: Impact
    description: str
    fix: str
    component_index: int | None = None
    guideline: str | None = Field(default=None, description="Background from capability providers")


class AccessibilityWarning(BaseModel):
    rule: str
    description: str
    recommendation: str
    component_index: int | None = None


class AccessibilityReport(BaseModel):
    passed: bool
    score: int = Field(..., ge=0, le=100)
    violations: list[AccessibilityViolation] = Field(default_factory=list)
    warnings: list[AccessibilityWarning] = Field(default_factory=list)

    @property
    def critical_violations(self) -> list[AccessibilityViolation]:
        return [v for v in self.violations if v.impact == Impact.CRITICAL]


class ValidationOutcome(BaseModel):
    """Result of one accessibility validation pass."""

    report: AccessibilityReport
    fixed_specification: Specification

    @property
    def blocking(self) -> bool:
        return not self.report.passed


# ============================================================================
# Export
# ============================================================================


class ExportOptions(BaseModel):
    model_config = ConfigDict(frozen=True)

    format: ExportFormat = ExportFormat.FULL
    single_file: bool = True
    include_css: bool = True
    typescript: bool = True
    framework: Literal["nextjs", "vite", "cra"] = "nextjs"

    def cache_key(self) -> str:
        return safe_json_dumps(self.model_dump(mode="json"), sort_keys=True)


class ExportFile(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: str
    content: str
    type: FileType


class ExportPackage(BaseModel):
    model_config = ConfigDict(frozen=True)

    format: ExportFormat
    files: tuple[ExportFile, ...] = ()
    instructions: str = ""
    fingerprint: str = ""

    def get_file(self, name: str) -> ExportFile | None:
        return next((f for f in self.files if f.name == name), None)


# ============================================================================
# Conversation
# ============================================================================


class PipelineMessage(BaseModel):
    """Record of one hand-off between pipeline participants."""

    model_config = ConfigDict(frozen=True)

    id: str = Field(default_factory=new_message_id)
    source: AgentRole
    destination: AgentRole
    action: AgentAction
    payload: dict[str, JsonValue] = Field(default_factory=dict)
    timestamp: datetime = Field(default_factory=utcnow)


class UserPreferences(BaseModel):
    style: Literal["modern", "classic", "minimal"] | None = None
    color_scheme: Literal["light", "dark", "auto"] | None = None
    accessibility: Literal["standard", "enhanced"] | None = None


class ConversationContext(BaseModel):
    """State owned by exactly one orchestrator for one conversation."""

    conversation_id: str = Field(default_factory=new_conversation_id)
    current_specification: Specification | None = None
    history: list[PipelineMessage] = Field(default_factory=list)
    preferences: UserPreferences | None = None


class StageError(BaseModel):
    model_config = ConfigDict(frozen=True)

    stage: AgentRole
    code: str
    message: str
    fatal: bool = False
    details: list[JsonValue] = Field(default_factory=list)


class PipelineResult(BaseModel):
    conversation_id: str
    success: bool = False
    state: PipelineState = PipelineState.IDLE
    specification: Specification | None = None
    design_feedback: DesignFeedback | None = None
    accessibility_report: AccessibilityReport | None = None
    export_package: ExportPackage | None = None
    errors: list[StageError] = Field(default_factory=list)
    messages: list[PipelineMessage] = Field(default_factory=list)

    def error_codes(self) -> list[str]:
        return [e.code for e in self.errors]


# ============================================================================
# Orchestration
# ============================================================================


class OrchestratorOptions(BaseModel):
    auto_apply_design_improvements: bool = True
    auto_apply_accessibility_fixes: bool = True
    skip_design_review: bool = False
    skip_accessibility_check: bool = False
    export_on_success: bool = True
    export_options: ExportOptions = Field(default_factory=ExportOptions)

    @classmethod
    def from_settings(cls, settings: Settings) -> "OrchestratorOptions":
        return cls(
            auto_apply_design_improvements=settings.auto_apply_design_improvements,
            auto_apply_accessibility_fixes=settings.auto_apply_accessibility_fixes,
            skip_design_review=settings.skip_design_review,
            skip_accessibility_check=settings.skip_accessibility_check,
            export_on_success=settings.export_on_success,
            export_options=ExportOptions(
                format=ExportFormat(settings.export_format),
                typescript=settings.export_typescript,
                framework=settings.export_framework,
            ),
        )


class PlanStep(BaseModel):
    order: int
    agent: AgentRole
    action: AgentAction
    depends_on: list[int] = Field(default_factory=list)
    required: bool = True


class OrchestrationPlan(BaseModel):
    id: str = Field(default_factory=new_plan_id)
    steps: list[PlanStep] = Field(default_factory=list)
    estimated_duration_ms: int = 0
