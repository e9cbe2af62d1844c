"""Capability provider tests."""

import pytest

from uismith.providers import (
    AccessibilityGuidelinesProvider,
    BaseProvider,
    ProviderInfo,
    ProviderRegistry,
    contrast_ratio,
    meets_wcag,
    relative_luminance,
)


class ExplodingProvider(BaseProvider):
    def definition(self) -> ProviderInfo:
        return ProviderInfo(id="exploding", name="Exploding", description="Always fails", topics=["boom"])

    def describe(self, topic):
        raise RuntimeError("provider offline")


@pytest.mark.unit
def test_default_providers_registered(providers):
    ids = [info.id for info in providers.list_all()]
    assert ids == ["design-system", "layout-rules", "accessibility-guidelines", "ux-heuristics"]


@pytest.mark.unit
def test_design_tokens(providers):
    text = providers.lookup("design-system", "colors")
    assert text.startswith("colors tokens:")
    assert "primary=#8b5cf6" in text


@pytest.mark.unit
def test_layout_rule(providers):
    assert "10 major components" in providers.lookup("layout-rules", "max-components-per-view")


@pytest.mark.unit
def test_guideline_by_rule_and_criterion(providers):
    expected = "WCAG 4.1.2 Name, Role, Value (Level A): UI components have accessible name, role, and value"
    assert providers.lookup("accessibility-guidelines", "button-name") == expected
    assert providers.lookup("accessibility-guidelines", "4.1.2") == expected


@pytest.mark.unit
def test_heuristic_by_category(providers):
    assert providers.lookup("ux-heuristics", "consistency").startswith("Consistency and standards:")


@pytest.mark.unit
def test_unknown_topic_and_provider(providers):
    assert providers.lookup("layout-rules", "nope") is None
    assert providers.lookup("nope", "colors") is None


@pytest.mark.unit
def test_failing_provider_yields_none():
    registry = ProviderRegistry()
    registry.register(ExplodingProvider())

    assert registry.get("exploding").covers("boom")
    assert registry.lookup("exploding", "boom") is None


@pytest.mark.unit
def test_relative_luminance_extremes():
    assert relative_luminance("#FFFFFF") == pytest.approx(1.0)
    assert relative_luminance("#000000") == pytest.approx(0.0)


@pytest.mark.unit
def test_contrast_ratio_is_symmetric():
    assert contrast_ratio("#000000", "#ffffff") == pytest.approx(21.0)
    assert contrast_ratio("#ffffff", "#000000") == pytest.approx(21.0)
    assert contrast_ratio("#8b5cf6", "#8b5cf6") == pytest.approx(1.0)


@pytest.mark.unit
@pytest.mark.parametrize(
    "ratio,level,large_text,expected",
    [
        (4.5, "AA", False, True),
        (4.49, "AA", False, False),
        (3.0, "AA", True, True),
        (6.99, "AAA", False, False),
        (4.5, "AAA", True, True),
    ],
)
def test_wcag_thresholds(ratio, level, large_text, expected):
    assert meets_wcag(ratio, level, large_text) is expected


@pytest.mark.unit
def test_check_contrast_recommends_fixes_below_aa():
    provider = AccessibilityGuidelinesProvider()

    check = provider.check_contrast("#777777", "#ffffff")
    assert check.ratio == 4.48
    assert not check.passes_aa
    assert not check.passes_aaa
    assert len(check.recommendations) == 2

    large = provider.check_contrast("#777777", "#ffffff", large_text=True)
    assert large.passes_aa
    assert large.recommendations == []


@pytest.mark.unit
def test_check_contrast_rejects_bad_colour():
    with pytest.raises(ValueError):
        AccessibilityGuidelinesProvider().check_contrast("#fff", "#000000")


@pytest.mark.unit
def test_contrast_topic(providers):
    text = providers.lookup("accessibility-guidelines", "contrast:#000000:#ffffff")
    assert text == "Contrast 21.0:1 passes AAA (AA needs 4.5:1, AAA needs 7.0:1)"
    assert "fails AA" in providers.lookup("accessibility-guidelines", "contrast:#777777:#ffffff")
    assert providers.lookup("accessibility-guidelines", "contrast:#000000") is None
    assert providers.lookup("accessibility-guidelines", "contrast:red:#ffffff") is None
    assert providers.lookup("accessibility-guidelines", "color-contrast").startswith("WCAG 1.4.3")
