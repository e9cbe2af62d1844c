"""Pipeline stages and the orchestrator that sequences them."""

from .models import (
    AgentAction,
    AgentRole,
    AccessibilityReport,
    AccessibilityViolation,
    AccessibilityWarning,
    ComponentNode,
    ConversationContext,
    CritiqueOutcome,
    DesignFeedback,
    DesignImprovement,
    DesignIssue,
    ExportFile,
    ExportFormat,
    ExportOptions,
    ExportPackage,
    FileType,
    Impact,
    IssueCategory,
    IssueSeverity,
    LayoutHints,
    OrchestrationPlan,
    OrchestratorOptions,
    PipelineMessage,
    PipelineResult,
    PipelineState,
    Specification,
    StageError,
    UserPreferences,
    ValidationOutcome,
)
from .errors import ExportError, GenerationError, GenerationErrorCode, SpecificationFormatError
from .rules import RuleBook
from .architect import RequestKind, UIArchitect
from .critic import DESIGN_RULES, DesignCritic
from .accessibility import ACCESSIBILITY_FIXES, ACCESSIBILITY_RULES, AccessibilityValidator
from .exporter import Exporter
from .orchestrator import Orchestrator, create_orchestrator, generate_ui

__all__ = [
    # Models
    "AgentAction",
    "AgentRole",
    "AccessibilityReport",
    "AccessibilityViolation",
    "AccessibilityWarning",
    "ComponentNode",
    "ConversationContext",
    "CritiqueOutcome",
    "DesignFeedback",
    "DesignImprovement",
    "DesignIssue",
    "ExportFile",
    "ExportFormat",
    "ExportOptions",
    "ExportPackage",
    "FileType",
    "Impact",
    "IssueCategory",
    "IssueSeverity",
    "LayoutHints",
    "OrchestrationPlan",
    "OrchestratorOptions",
    "PipelineMessage",
    "PipelineResult",
    "PipelineState",
    "Specification",
    "StageError",
    "UserPreferences",
    "ValidationOutcome",
    # Errors
    "ExportError",
    "GenerationError",
    "GenerationErrorCode",
    "SpecificationFormatError",
    # Stages
    "RuleBook",
    "RequestKind",
    "UIArchitect",
    "DESIGN_RULES",
    "DesignCritic",
    "ACCESSIBILITY_FIXES",
    "ACCESSIBILITY_RULES",
    "AccessibilityValidator",
    "Exporter",
    # Orchestration
    "Orchestrator",
    "create_orchestrator",
    "generate_ui",
]
