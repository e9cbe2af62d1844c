"""
Built-in Capability Providers
Design tokens, layout rules, WCAG guidelines and usability heuristics
"""

import re
from typing import Dict, List, Optional

from pydantic import BaseModel, Field

from .base import BaseProvider, ProviderInfo
from .registry import ProviderRegistry


class DesignSystemProvider(BaseProvider):
    """Design tokens of the generative component library."""

    TOKENS: Dict[str, Dict[str, str]] = {
        "colors": {
            "primary": "#8b5cf6",
            "secondary": "#64748b",
            "accent": "#06b6d4",
            "success": "#10b981",
            "warning": "#f59e0b",
            "error": "#ef4444",
            "info": "#3b82f6",
        },
        "spacing": {"xs": "0.25rem", "sm": "0.5rem", "md": "1rem", "lg": "1.5rem", "xl": "2rem", "2xl": "3rem"},
        "radius": {"sm": "0.25rem", "md": "0.5rem", "lg": "0.75rem", "xl": "1rem", "full": "9999px"},
        "typography": {"sans": "Inter, system-ui, sans-serif", "mono": "JetBrains Mono, monospace"},
    }

    def definition(self) -> ProviderInfo:
        return ProviderInfo(
            id="design-system",
            name="Design System",
            description="Color, spacing, radius and typography tokens",
            topics=list(self.TOKENS),
        )

    def describe(self, topic: str) -> Optional[str]:
        tokens = self.TOKENS.get(topic)
        if tokens is None:
            return None
        values = ", ".join(f"{name}={value}" for name, value in tokens.items())
        return f"{topic} tokens: {values}"


class LayoutRulesProvider(BaseProvider):
    """Composition rules for a single view."""

    RULES: Dict[str, str] = {
        "max-components-per-view": "Limit to 10 major components per view to avoid cognitive overload",
        "cta-placement": "Primary CTAs should be visible without scrolling",
        "spacing-consistency": "Always use spacing tokens, never arbitrary pixel values",
        "hierarchy": "Each page should have exactly one H1 heading",
        "content-width": "Content containers should not exceed 1200px; prose reads best at 65ch",
        "component-sizing": "Lead with one prominent (lg or xl) container to anchor the page",
    }

    def definition(self) -> ProviderInfo:
        return ProviderInfo(
            id="layout-rules",
            name="Layout Rules",
            description="Composition, container and hierarchy rules",
            topics=list(self.RULES),
        )

    def describe(self, topic: str) -> Optional[str]:
        return self.RULES.get(topic)


# ============================================================================
# Colour contrast (WCAG 2.1, 1.4.3 / 1.4.6)
# ============================================================================

HEX_COLOR = re.compile(r"^#[0-9A-Fa-f]{6}$")

# (level, large_text) -> minimum ratio
CONTRAST_THRESHOLDS: Dict[tuple[str, bool], float] = {
    ("AA", False): 4.5,
    ("AA", True): 3.0,
    ("AAA", False): 7.0,
    ("AAA", True): 4.5,
}


def relative_luminance(color: str) -> float:
    """
    WCAG relative luminance of a ``#rrggbb`` colour.

    Raises:
        ValueError: If the colour is not six-digit hex
    """
    if not HEX_COLOR.match(color):
        raise ValueError(f"Expected a #rrggbb colour, got {color!r}")

    channels = []
    for start in (1, 3, 5):
        srgb = int(color[start : start + 2], 16) / 255
        channels.append(srgb / 12.92 if srgb <= 0.03928 else ((srgb + 0.055) / 1.055) ** 2.4)
    red, green, blue = channels
    return 0.2126 * red + 0.7152 * green + 0.0722 * blue


def contrast_ratio(foreground: str, background: str) -> float:
    """Contrast ratio between two colours, from 1.0 to 21.0; order does not matter."""
    lighter, darker = sorted((relative_luminance(foreground), relative_luminance(background)), reverse=True)
    return (lighter + 0.05) / (darker + 0.05)


def meets_wcag(ratio: float, level: str = "AA", large_text: bool = False) -> bool:
    return ratio >= CONTRAST_THRESHOLDS[(level, large_text)]


class ContrastCheck(BaseModel):
    """Outcome of one foreground/background contrast check."""
    foreground: str
    background: str
    ratio: float = Field(..., description="Contrast ratio rounded to two decimals")
    large_text: bool = False
    passes_aa: bool
    passes_aaa: bool
    recommendations: List[str] = Field(default_factory=list)

    def summary(self) -> str:
        aa = CONTRAST_THRESHOLDS[("AA", self.large_text)]
        aaa = CONTRAST_THRESHOLDS[("AAA", self.large_text)]
        verdict = "passes AAA" if self.passes_aaa else "passes AA" if self.passes_aa else "fails AA"
        return f"Contrast {self.ratio}:1 {verdict} (AA needs {aa}:1, AAA needs {aaa}:1)"


class AccessibilityGuidelinesProvider(BaseProvider):
    """
    WCAG 2.1 success criteria, keyed by the validation rule they back.

    Also answers ``contrast:<foreground>:<background>`` topics with a
    contrast check of the two hex colours.
    """

    CRITERIA: Dict[str, tuple[str, str, str]] = {
        "1.1.1": ("Non-text Content", "A", "All non-text content must have text alternatives"),
        "1.3.1": ("Info and Relationships", "A", "Information and structure must be programmatically determinable"),
        "1.4.3": ("Contrast (Minimum)", "AA", "Text contrast ratio of at least 4.5:1 (3:1 for large text)"),
        "2.1.1": ("Keyboard", "A", "All functionality must be operable via keyboard"),
        "2.4.1": ("Bypass Blocks", "A", "Mechanism to bypass repeated content blocks"),
        "2.4.6": ("Headings and Labels", "AA", "Headings and labels describe topic or purpose"),
        "3.3.2": ("Labels or Instructions", "A", "Labels or instructions are provided for user input"),
        "4.1.2": ("Name, Role, Value", "A", "UI components have accessible name, role, and value"),
    }

    RULE_CRITERIA: Dict[str, str] = {
        "button-name": "4.1.2",
        "form-field-label": "3.3.2",
        "required-indication": "3.3.2",
        "modal-name": "4.1.2",
        "modal-escape": "2.1.1",
        "image-alt": "1.1.1",
        "card-interactive": "2.1.1",
        "chart-label": "1.1.1",
        "nav-item-label": "2.4.6",
        "landmark-main": "2.4.1",
        "heading-structure": "1.3.1",
        "color-contrast": "1.4.3",
    }

    def definition(self) -> ProviderInfo:
        return ProviderInfo(
            id="accessibility-guidelines",
            name="Accessibility Guidelines",
            description="WCAG 2.1 success criteria and colour contrast checks",
            topics=[*self.RULE_CRITERIA, *self.CRITERIA, "contrast"],
        )

    def check_contrast(self, foreground: str, background: str, large_text: bool = False) -> ContrastCheck:
        """
        Check a colour pair against the AA and AAA contrast minimums.

        Args:
            foreground: Text colour, ``#rrggbb``
            background: Background colour, ``#rrggbb``
            large_text: At least 18pt, or 14pt bold

        Raises:
            ValueError: If either colour is not six-digit hex
        """
        ratio = contrast_ratio(foreground, background)
        check = ContrastCheck(
            foreground=foreground,
            background=background,
            ratio=round(ratio, 2),
            large_text=large_text,
            passes_aa=meets_wcag(ratio, "AA", large_text),
            passes_aaa=meets_wcag(ratio, "AAA", large_text),
        )
        if not check.passes_aa:
            check.recommendations = [
                "Increase contrast by using a darker foreground or lighter background",
                "Consider using a different color combination from the design system",
            ]
        return check

    def describe(self, topic: str) -> Optional[str]:
        if topic.startswith("contrast:"):
            colors = topic.split(":")[1:]
            if len(colors) != 2 or not all(HEX_COLOR.match(c) for c in colors):
                return None
            return self.check_contrast(*colors).summary()

        criterion = self.RULE_CRITERIA.get(topic, topic)
        entry = self.CRITERIA.get(criterion)
        if entry is None:
            return None
        name, level, requirement = entry
        return f"WCAG {criterion} {name} (Level {level}): {requirement}"


class UXHeuristicsProvider(BaseProvider):
    """Nielsen's usability heuristics, keyed by design issue category."""

    HEURISTICS: Dict[str, tuple[str, str]] = {
        "spacing": (
            "Aesthetic and minimalist design",
            "Dialogues should not contain irrelevant or rarely needed information",
        ),
        "hierarchy": (
            "Recognition rather than recall",
            "Minimize user memory load by making options visible",
        ),
        "contrast": (
            "Visibility of system status",
            "Keep users informed about what's going on through appropriate feedback",
        ),
        "alignment": (
            "Aesthetic and minimalist design",
            "Every extra unit of information competes with the relevant units",
        ),
        "consistency": (
            "Consistency and standards",
            "Users shouldn't have to wonder whether different words, situations, or actions mean the same thing",
        ),
    }

    def definition(self) -> ProviderInfo:
        return ProviderInfo(
            id="ux-heuristics",
            name="UX Heuristics",
            description="Nielsen's usability heuristics",
            topics=list(self.HEURISTICS),
        )

    def describe(self, topic: str) -> Optional[str]:
        entry = self.HEURISTICS.get(topic)
        if entry is None:
            return None
        name, summary = entry
        return f"{name}: {summary}"


def create_default_providers() -> ProviderRegistry:
    """Provider registry pre-loaded with the built-in providers."""
    registry = ProviderRegistry()
    for provider in (
        DesignSystemProvider(),
        LayoutRulesProvider(),
        AccessibilityGuidelinesProvider(),
        UXHeuristicsProvider(),
    ):
        registry.register(provider)
    return registry
