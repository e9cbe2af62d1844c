"""Design Critic - rule-based design review of a specification."""

from ..core.logging_config import get_logger
from ..providers import ProviderRegistry, contrast_ratio, meets_wcag
from ..providers.builtin import CONTRAST_THRESHOLDS, HEX_COLOR
from .models import (
    ComponentNode,
    CritiqueOutcome,
    DesignFeedback,
    DesignImprovement,
    DesignIssue,
    IssueCategory,
    IssueSeverity,
    Specification,
)
from .rules import RuleBook, items_of, mappings_of, present, text_of

logger = get_logger(__name__)

DesignFinding = DesignIssue | DesignImprovement

DESIGN_RULES = RuleBook[DesignFinding]("design")

SEVERITY_PENALTY = {
    IssueSeverity.ERROR: 20,
    IssueSeverity.WARNING: 10,
    IssueSeverity.SUGGESTION: 5,
}

# Layout rule backing an issue message, when there is a more specific one
# than the category heuristic
ISSUE_TOPICS = {
    "Too many components may cause cognitive overload": "max-components-per-view",
    "Consider adding a call-to-action button": "cta-placement",
}


# ============================================================================
# Per-kind rules
# ============================================================================


@DESIGN_RULES.register("Button")
def _button_rules(component: ComponentNode, index: int):
    props = component.properties
    if props.get("size") in ("xs", "sm"):
        yield DesignImprovement(
            component_index=index,
            suggestion="Consider using a larger button for better visibility",
            proposed_properties={"size": "md"},
        )
    if present(props, "iconOnly") and not present(props, "ariaLabel") and not present(props, "aria-label"):
        yield DesignIssue(
            category=IssueCategory.HIERARCHY,
            severity=IssueSeverity.WARNING,
            message=f"Button at index {index} is icon-only without an aria-label",
            component_index=index,
        )


@DESIGN_RULES.register("Card")
def _card_rules(component: ComponentNode, index: int):
    props = component.properties
    if not present(props, "title") and not present(props, "header"):
        yield DesignImprovement(
            component_index=index,
            suggestion="Add a title for better visual hierarchy",
            proposed_properties={"title": "Section Title"},
        )
    if not present(props, "variant"):
        yield DesignImprovement(
            component_index=index,
            suggestion="Specify a card variant for visual interest",
            proposed_properties={"variant": "elevated"},
        )


@DESIGN_RULES.register("PricingTable")
def _pricing_rules(component: ComponentNode, index: int):
    if "tiers" not in component.properties:
        return
    tiers = items_of(component.properties, "tiers")
    if not any(present(tier, "featured") for tier in mappings_of(component.properties, "tiers")):
        yield DesignImprovement(
            component_index=index,
            suggestion="Mark one tier as featured to guide user attention",
        )
    if len(tiers) < 2:
        yield DesignIssue(
            category=IssueCategory.HIERARCHY,
            severity=IssueSeverity.SUGGESTION,
            message="Consider adding more pricing tiers for comparison",
            component_index=index,
        )


@DESIGN_RULES.register("Form")
def _form_rules(component: ComponentNode, index: int):
    props = component.properties
    if not present(props, "showValidationOnBlur") and not present(props, "showValidationOnChange"):
        yield DesignImprovement(
            component_index=index,
            suggestion="Enable validation feedback for better UX",
            proposed_properties={"showValidationOnBlur": True},
        )


@DESIGN_RULES.register("Chart")
def _chart_rules(component: ComponentNode, index: int):
    props = component.properties
    if not present(props, "title"):
        yield DesignImprovement(
            component_index=index,
            suggestion="Add a title to provide context for the chart",
            proposed_properties={"title": "Data Overview"},
        )
    if props.get("showLegend") is False:
        yield DesignImprovement(
            component_index=index,
            suggestion="Consider showing the legend for better data understanding",
            proposed_properties={"showLegend": True},
        )


@DESIGN_RULES.register("DashboardLayout")
def _dashboard_rules(component: ComponentNode, index: int):
    match component.properties.get("header"):
        case dict(header) if not present(header, "showBreadcrumbs"):
            yield DesignImprovement(
                component_index=index,
                suggestion="Add breadcrumbs for better navigation context",
            )


@DESIGN_RULES.register("TestimonialSection")
def _testimonial_rules(component: ComponentNode, index: int):
    props = component.properties
    if "testimonials" in props and len(items_of(props, "testimonials")) < 3:
        yield DesignImprovement(
            component_index=index,
            suggestion="Add more testimonials for stronger social proof",
        )
    if not present(props, "showRatings"):
        yield DesignImprovement(
            component_index=index,
            suggestion="Show ratings to increase credibility",
            proposed_properties={"showRatings": True},
        )


# ============================================================================
# Whole-specification rules
# ============================================================================


def layout_findings(spec: Specification) -> list[DesignFinding]:
    components = spec.components
    findings: list[DesignFinding] = []

    if len(components) > 10:
        findings.append(
            DesignIssue(
                category=IssueCategory.HIERARCHY,
                severity=IssueSeverity.WARNING,
                message="Too many components may cause cognitive overload",
            )
        )

    has_hero = any(c.kind == "Card" and c.properties.get("size") in ("lg", "xl") for c in components)
    if components and not has_hero:
        findings.append(
            DesignImprovement(
                component_index=0,
                suggestion="Consider making the first element larger for visual impact",
                proposed_properties={"size": "lg"},
            )
        )

    kinds = set(spec.kinds())
    if "Button" not in kinds and "Form" not in kinds:
        findings.append(
            DesignIssue(
                category=IssueCategory.HIERARCHY,
                severity=IssueSeverity.SUGGESTION,
                message="Consider adding a call-to-action button",
            )
        )
    return findings


def consistency_findings(spec: Specification) -> list[DesignFinding]:
    findings: list[DesignFinding] = []

    button_sizes = {
        str(c.properties["size"])
        for c in spec.components
        if c.kind == "Button" and c.properties.get("size") is not None
    }
    if len(button_sizes) > 2:
        findings.append(
            DesignIssue(
                category=IssueCategory.CONSISTENCY,
                severity=IssueSeverity.WARNING,
                message="Too many different button sizes (use max 2 for consistency)",
            )
        )

    card_variants = {
        str(c.properties["variant"])
        for c in spec.components
        if c.kind == "Card" and c.properties.get("variant") is not None
    }
    if len(card_variants) > 2:
        findings.append(
            DesignIssue(
                category=IssueCategory.CONSISTENCY,
                severity=IssueSeverity.SUGGESTION,
                message="Consider using fewer card variants for visual consistency",
            )
        )
    return findings


LARGE_TEXT_SIZES = ("lg", "xl", "2xl")


def contrast_findings(spec: Specification) -> list[DesignFinding]:
    """Warn about explicit hex colour pairs below the WCAG AA contrast minimum."""
    findings: list[DesignFinding] = []
    for index, component in enumerate(spec.components):
        props = component.properties
        foreground = text_of(props, "textColor", "color")
        background = text_of(props, "backgroundColor", "background")
        if not (foreground and background and HEX_COLOR.match(foreground) and HEX_COLOR.match(background)):
            continue

        large_text = props.get("size") in LARGE_TEXT_SIZES
        ratio = contrast_ratio(foreground, background)
        if not meets_wcag(ratio, "AA", large_text):
            required = CONTRAST_THRESHOLDS[("AA", large_text)]
            findings.append(
                DesignIssue(
                    category=IssueCategory.CONTRAST,
                    severity=IssueSeverity.WARNING,
                    message=f"{component.kind} at index {index} has contrast {ratio:.2f}:1, below {required}:1",
                    component_index=index,
                )
            )
    return findings


def score_feedback(issues: list[DesignIssue], improvements: list[DesignImprovement]) -> int:
    """100 minus severity penalties floored at 0, then +5 (capped) for 1-3 improvements."""
    score = max(0, 100 - sum(SEVERITY_PENALTY[issue.severity] for issue in issues))
    if 1 <= len(improvements) <= 3:
        score = min(100, score + 5)
    return score


class DesignCritic:
    """
    Scores a specification and proposes property improvements.

    The input specification is never modified; improvements are applied
    to a clone.
    """

    def __init__(self, providers: ProviderRegistry | None = None, rules: RuleBook[DesignFinding] | None = None) -> None:
        self.providers = providers
        self.rules = rules if rules is not None else DESIGN_RULES

    def review(self, spec: Specification) -> DesignFeedback:
        findings: list[DesignFinding] = []
        for index, component in enumerate(spec.components):
            findings.extend(self.rules.evaluate(component, index))
        findings.extend(layout_findings(spec))
        findings.extend(consistency_findings(spec))
        findings.extend(contrast_findings(spec))

        issues = [self._annotate(f) for f in findings if isinstance(f, DesignIssue)]
        improvements = [f for f in findings if isinstance(f, DesignImprovement)]
        return DesignFeedback(score=score_feedback(issues, improvements), issues=issues, improvements=improvements)

    def critique(self, spec: Specification) -> CritiqueOutcome:
        """
        Review a specification.

        Returns:
            Feedback plus the specification with every proposed property
            patch applied. It is returned even when the critique blocks, so
            the caller decides whether to adopt it. When a patch changes
            anything it is the next version; otherwise a plain clone.
        """
        feedback = self.review(spec)

        improved = spec.revise()
        changed = False
        for improvement in feedback.improvements:
            if improvement.proposed_properties:
                changed |= improved.apply_patch(improvement.component_index, improvement.proposed_properties)

        outcome = CritiqueOutcome(feedback=feedback, improved_specification=improved if changed else spec.clone())

        logger.info(
            "critique_complete",
            score=feedback.score,
            issues=len(feedback.issues),
            improvements=len(feedback.improvements),
            blocking=outcome.blocking,
        )
        return outcome

    def _annotate(self, issue: DesignIssue) -> DesignIssue:
        if self.providers is None:
            return issue
        if issue.category == IssueCategory.CONTRAST:
            detail = self.providers.lookup("accessibility-guidelines", "color-contrast")
        else:
            topic = ISSUE_TOPICS.get(issue.message)
            detail = self.providers.lookup("layout-rules", topic) if topic else None
        if detail is None:
            detail = self.providers.lookup("ux-heuristics", issue.category.value)
        if detail is None:
            return issue
        return issue.model_copy(update={"detail": detail})
