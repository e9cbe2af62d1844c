"""
Capability Providers
Read-only knowledge sources consulted by the critique and validation stages
"""

from .base import BaseProvider, ProviderInfo
from .registry import ProviderRegistry
from .builtin import (
    AccessibilityGuidelinesProvider,
    ContrastCheck,
    DesignSystemProvider,
    LayoutRulesProvider,
    UXHeuristicsProvider,
    contrast_ratio,
    create_default_providers,
    meets_wcag,
    relative_luminance,
)

__all__ = [
    "BaseProvider",
    "ProviderInfo",
    "ProviderRegistry",
    "AccessibilityGuidelinesProvider",
    "DesignSystemProvider",
    "LayoutRulesProvider",
    "UXHeuristicsProvider",
    "create_default_providers",
    # Contrast
    "ContrastCheck",
    "contrast_ratio",
    "meets_wcag",
    "relative_luminance",
]
