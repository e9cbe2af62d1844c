"""Accessibility Validator - WCAG-oriented checks with automatic fixes."""

from typing import Any

from ..core.logging_config import get_logger
from ..providers import ProviderRegistry
from ..registry import ComponentRegistry
from .models import (
    AccessibilityReport,
    AccessibilityViolation,
    AccessibilityWarning,
    ComponentNode,
    Impact,
    Specification,
    ValidationOutcome,
)
from .rules import RuleBook, is_false, items_of, mappings_of, present, text_of

logger = get_logger(__name__)

A11yFinding = AccessibilityViolation | AccessibilityWarning

ACCESSIBILITY_RULES = RuleBook[A11yFinding]("accessibility")

# Rule id -> handlers yielding property patches for the offending component
ACCESSIBILITY_FIXES = RuleBook[dict[str, Any]]("accessibility-fixes")

IMPACT_PENALTY = {
    Impact.CRITICAL: 25,
    Impact.SERIOUS: 15,
    Impact.MODERATE: 10,
    Impact.MINOR: 5,
}
WARNING_PENALTY = 2


def error_code(rule: str) -> str:
    """Machine-readable error code for a violated rule, e.g. ``A11Y_BUTTON_NAME``."""
    return "A11Y_" + rule.upper().replace("-", "_")


# ============================================================================
# Checks
# ============================================================================


@ACCESSIBILITY_RULES.register("Button")
def _button_name(component: ComponentNode, index: int):
    props = component.properties
    if present(props, "iconOnly"):
        if not present(props, "ariaLabel") and not present(props, "aria-label"):
            yield AccessibilityViolation(
                rule="button-name",
                impact=Impact.CRITICAL,
                description=f"Button at index {index} is icon-only without accessible name",
                fix="Add ariaLabel prop to the Button component",
                component_index=index,
            )
    elif not present(props, "text") and not present(props, "children"):
        yield AccessibilityViolation(
            rule="button-name",
            impact=Impact.CRITICAL,
            description=f"Button at index {index} has no text content",
            fix="Add text prop or children to the Button",
            component_index=index,
        )


def form_fields(properties: dict[str, Any]) -> list[dict[str, Any]]:
    """Flat field list of a form, whether it uses ``fields`` or ``sections``."""
    fields = mappings_of(properties, "fields")
    for section in mappings_of(properties, "sections"):
        fields.extend(mappings_of(section, "fields"))
    return fields


@ACCESSIBILITY_RULES.register("Form")
def _form_labels(component: ComponentNode, index: int):
    for field_index, field in enumerate(form_fields(component.properties)):
        name = field.get("name", field.get("id", field_index))
        if not present(field, "label") and not present(field, "aria-label"):
            yield AccessibilityViolation(
                rule="form-field-label",
                impact=Impact.CRITICAL,
                description=f'Form field "{name}" at index {field_index} has no label',
                fix=f'Add label prop to field "{name}"',
                component_index=index,
            )
        if present(field, "required") and "*" not in str(field.get("label") or ""):
            yield AccessibilityWarning(
                rule="required-indication",
                description=f'Required field "{name}" doesn\'t visually indicate requirement',
                recommendation="Required fields should be visually indicated (e.g., asterisk)",
                component_index=index,
            )


@ACCESSIBILITY_RULES.register("Modal")
def _modal_checks(component: ComponentNode, index: int):
    props = component.properties
    if not text_of(props, "title", "aria-label", "ariaLabel"):
        yield AccessibilityViolation(
            rule="modal-name",
            impact=Impact.SERIOUS,
            description=f"Modal at index {index} has no accessible name",
            fix="Add title or aria-label prop to the Modal",
            component_index=index,
        )
    if is_false(props, "showCloseButton") and not present(props, "closeOnEscape") and not present(props, "closeOnOverlayClick"):
        yield AccessibilityViolation(
            rule="modal-escape",
            impact=Impact.SERIOUS,
            description=f"Modal at index {index} has no way to close",
            fix="Enable at least one close mechanism: showCloseButton, closeOnEscape, or closeOnOverlayClick",
            component_index=index,
        )


@ACCESSIBILITY_RULES.register("Card")
def _card_checks(component: ComponentNode, index: int):
    props = component.properties
    if present(props, "clickable") and not present(props, "href") and not present(props, "onClick"):
        yield AccessibilityWarning(
            rule="card-interactive",
            description=f"Clickable card at index {index} should have clear interactive purpose",
            recommendation="Add href or ensure onClick handles keyboard events",
            component_index=index,
        )
    if present(props, "imageUrl") and not present(props, "imageAlt"):
        yield AccessibilityViolation(
            rule="image-alt",
            impact=Impact.SERIOUS,
            description=f"Card image at index {index} has no alt text",
            fix="Add imageAlt prop with descriptive text",
            component_index=index,
        )


@ACCESSIBILITY_RULES.register("Chart")
def _chart_label(component: ComponentNode, index: int):
    if not present(component.properties, "title") and not present(component.properties, "aria-label"):
        yield AccessibilityViolation(
            rule="chart-label",
            impact=Impact.SERIOUS,
            description=f"Chart at index {index} has no accessible label",
            fix="Add title or aria-label to describe the chart data",
            component_index=index,
        )


@ACCESSIBILITY_RULES.register("TestimonialSection")
def _testimonial_avatars(component: ComponentNode, index: int):
    for t_index, testimonial in enumerate(mappings_of(component.properties, "testimonials")):
        if present(testimonial, "authorAvatarUrl") and not present(testimonial, "authorName"):
            yield AccessibilityWarning(
                rule="image-alt",
                description=f"Testimonial {t_index} has avatar without author name for alt text",
                recommendation="Ensure authorName is provided for avatar alt text",
                component_index=index,
            )


def _nav_items(properties: dict[str, Any]) -> list[dict[str, Any]]:
    match properties.get("sidebar"):
        case dict(sidebar):
            return mappings_of(sidebar, "navItems")
    return []


@ACCESSIBILITY_RULES.register("DashboardLayout")
def _nav_labels(component: ComponentNode, index: int):
    for item_index, item in enumerate(_nav_items(component.properties)):
        if present(item, "icon") and not present(item, "label"):
            yield AccessibilityViolation(
                rule="nav-item-label",
                impact=Impact.SERIOUS,
                description=f"Navigation item {item_index} has icon but no label",
                fix="Add label prop to navigation item",
                component_index=index,
            )


def page_warnings(spec: Specification, registry: ComponentRegistry | None = None) -> list[AccessibilityWarning]:
    warnings: list[AccessibilityWarning] = []
    kinds = spec.kinds()

    if "DashboardLayout" not in kinds:
        warnings.append(
            AccessibilityWarning(
                rule="landmark-main",
                description="Consider using semantic landmarks for page structure",
                recommendation="Wrap content in main, nav, aside elements as appropriate",
            )
        )

    has_headings = any(present(c.properties, "title") or present(c.properties, "headline") for c in spec.components)
    if spec.components and not has_headings:
        warnings.append(
            AccessibilityWarning(
                rule="heading-structure",
                description="Page may lack proper heading structure",
                recommendation="Add headings to organize content hierarchically",
            )
        )

    if registry is not None:
        for index, kind in enumerate(kinds):
            if not registry.has(kind):
                warnings.append(
                    AccessibilityWarning(
                        rule="unknown-component",
                        description=f"Component '{kind}' at index {index} is not a registered kind and was not checked",
                        recommendation="Use a registered component kind or register this one",
                        component_index=index,
                    )
                )
    return warnings


def score_report(violations: list[AccessibilityViolation], warnings: list[AccessibilityWarning]) -> int:
    score = 100 - sum(IMPACT_PENALTY[v.impact] for v in violations) - WARNING_PENALTY * len(warnings)
    return max(0, score)


# ============================================================================
# Fixes
# ============================================================================


@ACCESSIBILITY_FIXES.register("button-name")
def _fix_button_name(component: ComponentNode, index: int):
    props = component.properties
    if present(props, "iconOnly"):
        icon = text_of(props, "icon", "leftIcon", "rightIcon") or "Action"
        yield {"ariaLabel": f"{icon} button"}


@ACCESSIBILITY_FIXES.register("modal-name")
def _fix_modal_name(component: ComponentNode, index: int):
    if not present(component.properties, "title"):
        yield {"aria-label": "Dialog"}


@ACCESSIBILITY_FIXES.register("modal-escape")
def _fix_modal_escape(component: ComponentNode, index: int):
    yield {"closeOnEscape": True}


@ACCESSIBILITY_FIXES.register("image-alt")
def _fix_image_alt(component: ComponentNode, index: int):
    props = component.properties
    if present(props, "imageUrl"):
        yield {"imageAlt": str(text_of(props, "title") or "Image")}


@ACCESSIBILITY_FIXES.register("chart-label")
def _fix_chart_label(component: ComponentNode, index: int):
    subtitle = text_of(component.properties, "subtitle") or "Data visualization"
    yield {"aria-label": f"Chart: {subtitle}"}


def _humanize(value: Any) -> str:
    return str(value).replace("_", " ").replace("-", " ").strip().title()


def _label_fields(fields: list[Any]) -> list[Any]:
    labelled = []
    for position, field in enumerate(fields):
        if isinstance(field, dict) and not present(field, "label") and not present(field, "aria-label"):
            field = {**field, "label": _humanize(field.get("name") or field.get("id") or f"Field {position + 1}")}
        labelled.append(field)
    return labelled


@ACCESSIBILITY_FIXES.register("form-field-label")
def _fix_form_labels(component: ComponentNode, index: int):
    props = component.properties
    if "fields" in props:
        yield {"fields": _label_fields(items_of(props, "fields"))}
    if "sections" in props:
        yield {
            "sections": [
                {**section, "fields": _label_fields(items_of(section, "fields"))} if isinstance(section, dict) else section
                for section in items_of(props, "sections")
            ]
        }


@ACCESSIBILITY_FIXES.register("nav-item-label")
def _fix_nav_labels(component: ComponentNode, index: int):
    match component.properties.get("sidebar"):
        case dict(sidebar):
            items = [
                {**item, "label": _humanize(item["icon"])}
                if isinstance(item, dict) and present(item, "icon") and not present(item, "label")
                else item
                for item in items_of(sidebar, "navItems")
            ]
            yield {"sidebar": {**sidebar, "navItems": items}}


class AccessibilityValidator:
    """
    Runs the accessibility catalog over a specification.

    Auto-fixes are applied to a clone and are not re-validated: the
    report always describes the specification as it was passed in.
    """

    def __init__(
        self,
        registry: ComponentRegistry | None = None,
        providers: ProviderRegistry | None = None,
        rules: RuleBook[A11yFinding] | None = None,
        fixes: RuleBook[dict[str, Any]] | None = None,
    ) -> None:
        self.registry = registry
        self.providers = providers
        self.rules = rules if rules is not None else ACCESSIBILITY_RULES
        self.fixes = fixes if fixes is not None else ACCESSIBILITY_FIXES

    def check(self, spec: Specification) -> AccessibilityReport:
        findings: list[A11yFinding] = []
        for index, component in enumerate(spec.components):
            findings.extend(self.rules.evaluate(component, index))

        violations = [self._annotate(f) for f in findings if isinstance(f, AccessibilityViolation)]
        warnings = [f for f in findings if isinstance(f, AccessibilityWarning)]
        warnings.extend(page_warnings(spec, self.registry))

        passed = not any(v.impact == Impact.CRITICAL for v in violations)
        return AccessibilityReport(
            passed=passed,
            score=score_report(violations, warnings),
            violations=violations,
            warnings=warnings,
        )

    def apply_fixes(self, spec: Specification, report: AccessibilityReport) -> Specification:
        """Next version of ``spec`` with fixes applied, or a plain clone if none changed anything."""
        fixed = spec.revise()
        changed = False
        for violation in report.violations:
            index = violation.component_index
            if index is None or not 0 <= index < len(fixed.components):
                continue
            for patch in self.fixes.run(violation.rule, fixed.components[index], index):
                changed |= fixed.apply_patch(index, patch)
        return fixed if changed else spec.clone()

    def validate(self, spec: Specification) -> ValidationOutcome:
        report = self.check(spec)
        outcome = ValidationOutcome(report=report, fixed_specification=self.apply_fixes(spec, report))

        logger.info(
            "accessibility_checked",
            passed=report.passed,
            score=report.score,
            violations=len(report.violations),
            critical=len(report.critical_violations),
            warnings=len(report.warnings),
        )
        return outcome

    def _annotate(self, violation: AccessibilityViolation) -> AccessibilityViolation:
        if self.providers is None:
            return violation
        guideline = self.providers.lookup("accessibility-guidelines", violation.rule)
        if guideline is None:
            return violation
        return violation.model_copy(update={"guideline": guideline})
