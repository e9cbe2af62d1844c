"""
Built-in Component Kinds
The eight kinds the generative component library ships with
"""

from .components import ComponentRegistry
from .types import ComponentKind, KindCategory, PropertySpec, PropertyType

SIZES = ["xs", "sm", "md", "lg", "xl", "2xl"]


def _string(name: str, description: str = "", **kwargs) -> PropertySpec:
    return PropertySpec(name=name, type=PropertyType.STRING, description=description, **kwargs)


def _flag(name: str, description: str = "") -> PropertySpec:
    return PropertySpec(name=name, type=PropertyType.BOOLEAN, description=description)


def _number(name: str, description: str = "", **kwargs) -> PropertySpec:
    return PropertySpec(name=name, type=PropertyType.NUMBER, description=description, **kwargs)


def _array(name: str, description: str = "", **kwargs) -> PropertySpec:
    return PropertySpec(name=name, type=PropertyType.ARRAY, description=description, **kwargs)


def _object(name: str, description: str = "", **kwargs) -> PropertySpec:
    return PropertySpec(name=name, type=PropertyType.OBJECT, description=description, **kwargs)


BUTTON = ComponentKind(
    name="Button",
    description="Clickable action with optional icons",
    category=KindCategory.ACTION,
    properties=[
        _string("text", "Button label"),
        _string("variant", choices=["solid", "outline", "ghost", "link", "soft"]),
        _string("color"),
        _string("size", choices=SIZES),
        _string("leftIcon"),
        _string("rightIcon"),
        _flag("iconOnly", "Render only the icon"),
        _flag("disabled"),
        _flag("loading"),
        _flag("fullWidth"),
        _string("ariaLabel", "Accessible name for icon-only buttons"),
        _string("href"),
        _flag("openInNewTab"),
    ],
)

CARD = ComponentKind(
    name="Card",
    description="Container for grouped content",
    category=KindCategory.CONTAINER,
    properties=[
        _string("title"),
        _string("subtitle"),
        _string("variant", choices=["elevated", "outlined", "filled", "glass", "gradient"]),
        _string("size", choices=SIZES),
        _string("content"),
        _string("imageUrl"),
        _string("imagePosition", choices=["top", "left", "right", "background"]),
        _string("imageAlt"),
        _flag("hasHeader"),
        _string("headerTitle"),
        _flag("hasFooter"),
        _string("footerContent"),
        _flag("hoverable"),
        _flag("clickable"),
        _string("href"),
        _flag("fullWidth"),
    ],
)

PRICING_TABLE = ComponentKind(
    name="PricingTable",
    description="Subscription tiers with feature lists",
    category=KindCategory.MARKETING,
    properties=[
        _string("headline"),
        _string("subheadline"),
        _array("tiers", "Pricing tiers", required=True, min_items=1, max_items=5),
        _string("layout", choices=["horizontal", "comparison"]),
        _flag("showBillingToggle"),
        _number("yearlyDiscount", minimum=0, maximum=100),
        _string("defaultBilling", choices=["monthly", "yearly"]),
        _flag("compact"),
        _flag("showFeatureComparison"),
        _array("faqItems"),
    ],
)

DASHBOARD_LAYOUT = ComponentKind(
    name="DashboardLayout",
    description="Application shell with sidebar and header",
    category=KindCategory.LAYOUT,
    properties=[
        _object("sidebar"),
        _flag("showSidebar"),
        _object("header"),
        _flag("showHeader"),
        _string("pageTitle"),
        _string("pageDescription"),
        _string("contentPadding", choices=["none", "sm", "md", "lg"]),
        _string("theme", choices=["light", "dark", "system"]),
    ],
)

CHART = ComponentKind(
    name="Chart",
    description="Data visualization",
    category=KindCategory.DATA,
    properties=[
        _string("type", required=True, choices=["line", "bar", "area", "pie", "donut", "scatter", "composed"]),
        _array("data", "Data points", required=True, min_items=1),
        _array("series"),
        _string("title"),
        _string("subtitle"),
        _string("xAxisLabel"),
        _string("yAxisLabel"),
        _flag("showLegend"),
        _flag("showGrid"),
        _flag("showTooltip"),
        _flag("animated"),
        _string("colorScheme", choices=["default", "warm", "cool", "monochrome", "vibrant", "pastel"]),
        _number("height", minimum=0),
    ],
)

FORM = ComponentKind(
    name="Form",
    description="Input fields with submission",
    category=KindCategory.INPUT,
    properties=[
        _string("title"),
        _string("description"),
        _array("fields"),
        _array("sections"),
        _string("layout", choices=["vertical", "horizontal", "inline"]),
        _string("labelPosition", choices=["top", "left", "floating"]),
        _string("submitText"),
        _flag("showSubmitButton"),
        _flag("showCancelButton"),
        _flag("showValidationOnBlur"),
        _flag("showValidationOnChange"),
        _string("size", choices=SIZES),
    ],
)

MODAL = ComponentKind(
    name="Modal",
    description="Dialog overlay",
    category=KindCategory.OVERLAY,
    properties=[
        _string("title"),
        _string("description"),
        _string("content"),
        _string("size", choices=["sm", "md", "lg", "xl", "full"]),
        _string("position", choices=["center", "top", "bottom", "left", "right"]),
        _string("variant", choices=["default", "alert", "success", "warning", "destructive"]),
        _flag("showCloseButton"),
        _object("primaryAction"),
        _object("secondaryAction"),
        _flag("closeOnOverlayClick"),
        _flag("closeOnEscape"),
        _flag("isOpen"),
    ],
)

TESTIMONIAL_SECTION = ComponentKind(
    name="TestimonialSection",
    description="Customer quotes with ratings",
    category=KindCategory.MARKETING,
    properties=[
        _string("headline"),
        _string("subheadline"),
        _array("testimonials", required=True, min_items=1),
        _string("layout", choices=["grid", "carousel", "masonry", "single", "list"]),
        _number("columns", minimum=1, maximum=4),
        _flag("showRatings"),
        _flag("showAvatars"),
        _string("cardStyle", choices=["elevated", "outlined", "minimal", "glass", "quote"]),
    ],
)

BUILTIN_KINDS = [
    BUTTON,
    CARD,
    PRICING_TABLE,
    DASHBOARD_LAYOUT,
    CHART,
    FORM,
    MODAL,
    TESTIMONIAL_SECTION,
]


def create_default_registry() -> ComponentRegistry:
    """Registry pre-loaded with the built-in kinds."""
    registry = ComponentRegistry()
    for kind in BUILTIN_KINDS:
        registry.register(kind)
    return registry
