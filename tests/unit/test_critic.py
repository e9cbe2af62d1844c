"""Design critique tests."""

import pytest
from hypothesis import given, settings as hypothesis_settings, strategies as st

from uismith.agents import (
    ComponentNode,
    DesignCritic,
    DesignImprovement,
    DesignIssue,
    IssueCategory,
    IssueSeverity,
    RuleBook,
    Specification,
)
from uismith.agents.critic import score_feedback
from uismith.agents.templates import Templates


def spec_of(*components: ComponentNode) -> Specification:
    return Specification(components=list(components))


@pytest.mark.unit
def test_pricing_page_scores_full_marks(critic):
    outcome = critic.critique(spec_of(Templates.pricing_table()))

    assert outcome.feedback.score == 100
    assert not outcome.blocking
    assert [i.message for i in outcome.feedback.issues] == ["Consider adding a call-to-action button"]
    assert outcome.improved_specification.components[0].properties["size"] == "lg"


@pytest.mark.unit
def test_input_is_never_modified(critic):
    spec = spec_of(ComponentNode(kind="Card"), ComponentNode(kind="Button", properties={"text": "Go", "size": "sm"}))
    before = spec.model_dump()

    outcome = critic.critique(spec)

    assert spec.model_dump() == before
    improved = outcome.improved_specification
    assert improved.components[0].properties == {"title": "Section Title", "variant": "elevated", "size": "lg"}
    assert improved.components[1].properties["size"] == "md"


@pytest.mark.unit
def test_small_button_and_missing_card_title(critic):
    feedback = critic.review(
        spec_of(
            ComponentNode(kind="Card", properties={"size": "lg"}),
            ComponentNode(kind="Button", properties={"size": "xs"}),
        )
    )
    suggestions = [i.suggestion for i in feedback.improvements]

    assert "Consider using a larger button for better visibility" in suggestions
    assert "Add a title for better visual hierarchy" in suggestions
    assert "Specify a card variant for visual interest" in suggestions
    assert feedback.issues == []
    assert feedback.score == 100


@pytest.mark.unit
def test_icon_only_button_warning(critic):
    feedback = critic.review(spec_of(Templates.card(), Templates.button(icon_only=True)))

    assert len(feedback.issues) == 1
    issue = feedback.issues[0]
    assert issue.severity == IssueSeverity.WARNING
    assert issue.component_index == 1
    assert feedback.score == 90


@pytest.mark.unit
def test_too_many_components(critic):
    components = [Templates.card() for _ in range(11)] + [Templates.button()]
    feedback = critic.review(spec_of(*components))

    overload = [i for i in feedback.issues if "cognitive overload" in i.message]
    assert len(overload) == 1
    assert overload[0].detail.startswith("Limit to 10 major components")


@pytest.mark.unit
def test_consistency_findings(critic):
    buttons = [ComponentNode(kind="Button", properties={"text": "Go", "size": size}) for size in ("md", "lg", "xl")]
    cards = [Templates.card(variant) for variant in ("elevated", "glass", "outlined")]
    feedback = critic.review(spec_of(*cards, *buttons))

    categories = [i.category for i in feedback.issues]
    assert categories.count(IssueCategory.CONSISTENCY) == 2
    # 100 - warning(10) - suggestion(5)
    assert feedback.score == 85


@pytest.mark.unit
def test_issue_detail_from_providers(critic):
    feedback = critic.review(spec_of(Templates.chart()))
    cta = next(i for i in feedback.issues if i.message == "Consider adding a call-to-action button")
    assert cta.detail == "Primary CTAs should be visible without scrolling"


@pytest.mark.unit
def test_no_providers_means_no_detail():
    feedback = DesignCritic().review(spec_of(Templates.chart()))
    assert all(issue.detail is None for issue in feedback.issues)


@pytest.mark.unit
def test_chart_rules(critic):
    feedback = critic.review(
        spec_of(ComponentNode(kind="Chart", properties={"type": "bar", "data": [1], "showLegend": False}))
    )
    proposed = [i.proposed_properties for i in feedback.improvements if i.component_index == 0]
    assert {"title": "Data Overview"} in proposed
    assert {"showLegend": True} in proposed


@pytest.mark.unit
def test_blocking_critique_still_returns_improved_specification():
    rules = RuleBook("strict")

    @rules.register("Card")
    def _no_cards(component, index):
        yield DesignIssue(
            category=IssueCategory.HIERARCHY,
            severity=IssueSeverity.ERROR,
            message="Cards are not allowed",
            component_index=index,
        )
        yield DesignImprovement(component_index=index, suggestion="Outline it", proposed_properties={"variant": "outlined"})

    spec = spec_of(Templates.card(), Templates.button())
    outcome = DesignCritic(rules=rules).critique(spec)

    assert outcome.blocking
    assert outcome.feedback.score == 85
    improved = outcome.improved_specification
    assert improved is not None
    assert improved.components[0].properties["variant"] == "outlined"
    assert improved.metadata.version == spec.metadata.version + 1
    assert spec.components[0].properties["variant"] == "elevated"


@pytest.mark.unit
def test_score_floor():
    issues = [
        DesignIssue(category=IssueCategory.SPACING, severity=IssueSeverity.ERROR, message=str(n)) for n in range(7)
    ]
    assert score_feedback(issues, []) == 0


@pytest.mark.unit
def test_improvement_bonus_applies_after_floor():
    issues = [
        DesignIssue(category=IssueCategory.SPACING, severity=IssueSeverity.ERROR, message=str(n)) for n in range(6)
    ]
    improvements = [DesignImprovement(component_index=0, suggestion="Bigger")]
    assert score_feedback(issues, improvements) == 5


@pytest.mark.unit
def test_heavily_penalised_spec_keeps_improvement_bonus(critic):
    # 11 icon-only warnings + cognitive overload, one "make it larger" improvement
    feedback = critic.review(spec_of(*[Templates.button(icon_only=True) for _ in range(11)]))

    assert feedback.count(IssueSeverity.WARNING) == 12
    assert len(feedback.improvements) == 1
    assert feedback.score == 5


@pytest.mark.unit
def test_applied_improvements_produce_next_version(critic):
    spec = spec_of(Templates.pricing_table())

    improved = critic.critique(spec).improved_specification

    assert improved.metadata.version == spec.metadata.version + 1
    assert improved.id != spec.id
    assert spec.metadata.version == 1


@pytest.mark.unit
def test_no_applicable_improvement_keeps_version(critic):
    spec = spec_of(Templates.card(), Templates.button())

    outcome = critic.critique(spec)

    assert outcome.feedback.improvements == []
    assert outcome.improved_specification.id == spec.id
    assert outcome.improved_specification.metadata.version == spec.metadata.version
    assert outcome.improved_specification is not spec


@pytest.mark.unit
def test_improvement_matching_current_values_keeps_version(critic):
    # The Button size is already "md", so the proposed patch changes nothing
    rules = RuleBook("noop")

    @rules.register("Button")
    def _medium(component, index):
        yield DesignImprovement(component_index=index, suggestion="Medium", proposed_properties={"size": "md"})

    spec = spec_of(Templates.card(), ComponentNode(kind="Button", properties={"text": "Go", "size": "md"}))
    outcome = DesignCritic(rules=rules).critique(spec)

    assert outcome.improved_specification.metadata.version == 1
    assert outcome.improved_specification.id == spec.id


@pytest.mark.unit
def test_low_contrast_colours_flagged(critic):
    low = ComponentNode(kind="Banner", properties={"textColor": "#777777", "backgroundColor": "#ffffff"})
    high = ComponentNode(kind="Banner", properties={"textColor": "#000000", "backgroundColor": "#ffffff"})
    feedback = critic.review(spec_of(Templates.card(), low, high, Templates.button()))

    contrast = [i for i in feedback.issues if i.category == IssueCategory.CONTRAST]
    assert len(contrast) == 1
    issue = contrast[0]
    assert issue.severity == IssueSeverity.WARNING
    assert issue.component_index == 1
    assert "4.48:1" in issue.message
    assert issue.detail.startswith("WCAG 1.4.3 Contrast (Minimum)")


@pytest.mark.unit
def test_large_text_uses_lower_contrast_minimum(critic):
    banner = ComponentNode(kind="Banner", properties={"color": "#777777", "background": "#ffffff", "size": "xl"})
    feedback = critic.review(spec_of(Templates.card(), banner, Templates.button()))
    assert not any(i.category == IssueCategory.CONTRAST for i in feedback.issues)


@pytest.mark.unit
def test_named_colours_are_not_contrast_checked(critic):
    banner = ComponentNode(kind="Banner", properties={"textColor": "primary", "backgroundColor": "#ffffff"})
    feedback = critic.review(spec_of(Templates.card(), banner, Templates.button()))
    assert not any(i.category == IssueCategory.CONTRAST for i in feedback.issues)


KINDS = ["Button", "Card", "PricingTable", "Form", "Chart", "DashboardLayout", "TestimonialSection", "Modal", "Other"]
PROPERTIES = st.dictionaries(
    st.sampled_from(["size", "title", "variant", "iconOnly", "tiers", "showLegend", "header", "testimonials"]),
    st.one_of(
        st.none(),
        st.booleans(),
        st.sampled_from(["xs", "sm", "lg", "xl", "glass"]),
        st.lists(st.dictionaries(st.sampled_from(["featured", "name"]), st.booleans()), max_size=3),
        st.dictionaries(st.sampled_from(["showBreadcrumbs", "title"]), st.booleans()),
    ),
)


@hypothesis_settings(max_examples=75)
@given(st.lists(st.builds(ComponentNode, kind=st.sampled_from(KINDS), properties=PROPERTIES), max_size=14))
def test_score_always_in_range(components):
    """Property: critique scores stay within [0, 100] for arbitrary specifications."""
    outcome = DesignCritic().critique(Specification(components=components))
    assert 0 <= outcome.feedback.score <= 100
