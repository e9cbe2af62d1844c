"""UI Architect - keyword-driven specification generation."""

import re
from collections.abc import Callable
from enum import Enum

from returns.result import Failure, Result, Success

from ..core.logging_config import get_logger
from ..registry import ComponentRegistry
from .errors import GenerationError, GenerationErrorCode
from .models import ComponentNode, LayoutHints, Specification, SpecificationMetadata, UserPreferences
from .templates import Templates

logger = get_logger(__name__)


class RequestKind(str, Enum):
    CREATE = "create"
    MODIFY = "modify"
    UNCLASSIFIED = "unclassified"


class TemplateError(Exception):
    """A template produced a component the registry does not accept."""


class UIArchitect:
    """
    Turns request text into a specification.

    Classification and component selection are plain keyword lookups:
    every decision is a substring test against the lower-cased request.
    """

    MODIFY_KEYWORDS = (
        "change", "update", "modify", "make it", "add to",
        "remove", "improve", "fix", "adjust", "tweak",
        "instead", "replace", "bigger", "smaller", "more",
    )

    CREATE_KEYWORDS = (
        "create", "build", "make", "generate", "design",
        "new", "start", "begin", "i want", "i need",
    )

    TOPICS: dict[str, tuple[str, ...]] = {
        "button": ("button", "cta", "action", "click", "submit"),
        "card": ("card", "container", "box", "section", "panel"),
        "pricing": ("pricing", "plans", "tiers", "subscription", "cost"),
        "dashboard": ("dashboard", "admin", "panel", "analytics", "stats"),
        "chart": ("chart", "graph", "data", "visualization", "metrics"),
        "form": ("form", "input", "submit", "contact", "sign up", "login"),
        "modal": ("modal", "dialog", "popup", "overlay", "confirm"),
        "testimonial": ("testimonial", "review", "quote", "feedback", "customer"),
    }

    STYLE_WORDS = ("modern", "minimal", "clean", "professional", "vibrant", "dark", "light")

    TOPIC_KINDS = {
        "button": "Button",
        "card": "Card",
        "pricing": "PricingTable",
        "dashboard": "DashboardLayout",
        "chart": "Chart",
        "form": "Form",
        "modal": "Modal",
        "testimonial": "TestimonialSection",
    }

    # Topics that add a component on the create path, in output order
    SECTION_ORDER = ("pricing", "dashboard", "chart", "form", "modal", "testimonial")

    FULL_WIDTH_KINDS = {"DashboardLayout", "PricingTable"}

    ICON_ONLY_PHRASES = ("icon-only", "icon only", "icon button")

    _REMOVE = re.compile(r"\bremove (?:the |a |an |all )?([a-z-]+)")
    _REPLACE = re.compile(r"\breplace (?:the |a |an )?([a-z-]+) with (?:the |a |an )?([a-z-]+)")
    _ADD = re.compile(r"\badd (?:a |an |the |some )?([a-z-]+)")

    def __init__(self, registry: ComponentRegistry) -> None:
        self.registry = registry

    # ------------------------------------------------------------------
    # Classification
    # ------------------------------------------------------------------

    def classify(self, request: str, has_prior: bool) -> RequestKind:
        text = request.lower()
        if not text.strip() and not has_prior:
            return RequestKind.UNCLASSIFIED

        wants_modify = any(k in text for k in self.MODIFY_KEYWORDS)
        wants_create = any(k in text for k in self.CREATE_KEYWORDS)

        if wants_modify and has_prior:
            return RequestKind.MODIFY
        if wants_create or not has_prior:
            return RequestKind.CREATE
        return RequestKind.MODIFY

    def extract_keywords(self, request: str) -> list[str]:
        """Topic names plus ``style:<word>`` entries found in the request."""
        text = request.lower()
        keywords = [topic for topic, terms in self.TOPICS.items() if any(t in text for t in terms)]
        keywords.extend(f"style:{word}" for word in self.STYLE_WORDS if word in text)
        return keywords

    def topic_for(self, word: str) -> str | None:
        """Map a single word ("charts", "cta") to its topic, if any."""
        for topic, terms in self.TOPICS.items():
            if any(word == term or word.startswith(term) for term in terms if " " not in term):
                return topic
        return None

    # ------------------------------------------------------------------
    # Entry point
    # ------------------------------------------------------------------

    def generate(
        self,
        request: str,
        prior: Specification | None = None,
        preferences: UserPreferences | None = None,
        kind: RequestKind | None = None,
    ) -> Result[Specification, GenerationError]:
        """
        Produce a new specification or a revision of ``prior``.

        Args:
            request: Request text
            prior: Current specification of the conversation, if any
            preferences: Conversation style preferences
            kind: Force create or modify instead of classifying the text

        Returns:
            Success with the specification, or Failure with a GenerationError
        """
        kind = kind or self.classify(request, prior is not None)
        logger.debug("request_classified", kind=kind.value, has_prior=prior is not None)

        match kind:
            case RequestKind.UNCLASSIFIED:
                return Failure(
                    GenerationError(
                        GenerationErrorCode.UNCLASSIFIED_REQUEST,
                        "Could not understand the request. Please describe what UI you want to create.",
                    )
                )
            case RequestKind.MODIFY if prior is None:
                return Failure(
                    GenerationError(
                        GenerationErrorCode.NO_PRIOR_SPECIFICATION,
                        "No existing UI to modify. Please create a UI first.",
                    )
                )

        try:
            if kind == RequestKind.MODIFY:
                spec = self._modify(request, prior, preferences)
            else:
                spec = self._create(request, preferences)
        except Exception as e:
            logger.error("generation_failed", error=str(e), exc_info=True)
            return Failure(GenerationError(GenerationErrorCode.INTERNAL_FAILURE, str(e)))

        logger.info(
            "specification_generated",
            kind=kind.value,
            name=spec.name,
            components=spec.kinds(),
            version=spec.metadata.version,
        )
        return Success(spec)

    # ------------------------------------------------------------------
    # Create path
    # ------------------------------------------------------------------

    def _create(self, request: str, preferences: UserPreferences | None) -> Specification:
        text = request.lower()
        keywords = self.extract_keywords(request)
        components: list[ComponentNode] = []

        for topic in self.SECTION_ORDER:
            if topic in keywords:
                components.append(self._build(topic, request, preferences))

        if "card" in keywords or "hero" in text or "feature" in text:
            components.append(self._build("card", request, preferences))

        if components and any(word in text for word in ("landing", "hero", "cta")):
            components.append(self._build("button", request, preferences))

        if not components:
            components.append(self._build("card", request, preferences))
            components.append(self._build("button", request, preferences))

        return Specification(
            name=self._name_for(text),
            description=request,
            components=components,
            layout=self._layout_for(components),
            metadata=SpecificationMetadata(version=1),
        )

    def _name_for(self, text: str) -> str:
        for word, name in (
            ("pricing", "Pricing Page"),
            ("dashboard", "Dashboard"),
            ("landing", "Landing Page"),
            ("hero", "Hero Section"),
            ("contact", "Contact Form"),
            ("testimonial", "Testimonials Section"),
        ):
            if word in text:
                return name
        return "Generated UI"

    def _layout_for(self, components: list[ComponentNode]) -> LayoutHints:
        if any(c.kind in self.FULL_WIDTH_KINDS for c in components):
            return LayoutHints(arrangement="stack", spacing="0")
        return LayoutHints(arrangement="stack", spacing="2rem", max_width="1200px")

    # ------------------------------------------------------------------
    # Modify path
    # ------------------------------------------------------------------

    def _modify(self, request: str, prior: Specification, preferences: UserPreferences | None) -> Specification:
        text = request.lower()
        spec = prior.revise()

        if "modern" in text:
            spec.apply_patch(0, {"variant": "glass"})
        if "bigger" in text or "larger" in text:
            spec.apply_patch(0, {"size": "xl"})
        if "smaller" in text:
            spec.apply_patch(0, {"size": "sm"})

        for found in self._REMOVE.finditer(text):
            topic = self.topic_for(found.group(1))
            if topic is not None:
                self._remove_first(spec, self.TOPIC_KINDS[topic])

        for found in self._REPLACE.finditer(text):
            old_topic, new_topic = self.topic_for(found.group(1)), self.topic_for(found.group(2))
            if old_topic is None or new_topic is None:
                continue
            index = self._index_of(spec, self.TOPIC_KINDS[old_topic])
            if index is not None:
                spec.components[index] = self._build(new_topic, request, preferences)

        for found in self._ADD.finditer(text):
            topic = self.topic_for(found.group(1))
            if topic is not None:
                spec.components.append(self._build(topic, request, preferences))

        return spec

    @staticmethod
    def _index_of(spec: Specification, kind: str) -> int | None:
        return next((i for i, c in enumerate(spec.components) if c.kind == kind), None)

    def _remove_first(self, spec: Specification, kind: str) -> None:
        index = self._index_of(spec, kind)
        if index is not None:
            del spec.components[index]

    # ------------------------------------------------------------------
    # Templates
    # ------------------------------------------------------------------

    def _build(self, topic: str, request: str, preferences: UserPreferences | None) -> ComponentNode:
        builders: dict[str, Callable[[], ComponentNode]] = {
            "button": lambda: Templates.button(self._button_text(request), self._icon_only(request)),
            "card": lambda: Templates.card(self._card_variant(request, preferences)),
            "pricing": Templates.pricing_table,
            "dashboard": Templates.dashboard,
            "chart": Templates.chart,
            "form": Templates.form,
            "modal": Templates.modal,
            "testimonial": Templates.testimonials,
        }
        node = builders[topic]()

        problems = self.registry.validate_properties(node.kind, node.properties)
        if problems:
            raise TemplateError(f"Template for '{topic}' rejected: {'; '.join(problems)}")
        return node

    @staticmethod
    def _button_text(request: str) -> str:
        text = request.lower()
        if "contact" in text:
            return "Contact Us"
        if "sign up" in text:
            return "Sign Up"
        if "learn more" in text:
            return "Learn More"
        if "try" in text:
            return "Try for Free"
        return "Get Started"

    def _icon_only(self, request: str) -> bool:
        text = request.lower()
        return any(phrase in text for phrase in self.ICON_ONLY_PHRASES)

    @staticmethod
    def _card_variant(request: str, preferences: UserPreferences | None) -> str:
        text = request.lower()
        if "modern" in text or "glass" in text:
            return "glass"
        if "gradient" in text:
            return "gradient"
        match preferences:
            case UserPreferences(style="modern"):
                return "glass"
            case UserPreferences(style="minimal"):
                return "outlined"
        return "elevated"
