"""
Component Kind Registry
Central lookup for the component kinds the pipeline may emit
"""

from typing import Any, Dict, List, Optional

from ..core.logging_config import get_logger
from .types import ComponentKind, KindCategory, PropertySpec, PropertyType

logger = get_logger(__name__)


def _matches_type(value: Any, expected: PropertyType) -> bool:
    match expected:
        case PropertyType.ANY:
            return True
        case PropertyType.STRING:
            return isinstance(value, str)
        case PropertyType.BOOLEAN:
            return isinstance(value, bool)
        case PropertyType.NUMBER:
            return isinstance(value, (int, float)) and not isinstance(value, bool)
        case PropertyType.ARRAY:
            return isinstance(value, list)
        case PropertyType.OBJECT:
            return isinstance(value, dict)
    return False


class ComponentRegistry:
    """
    Registry of component kinds.
    Built once at startup and shared read-only by every stage.
    """

    def __init__(self) -> None:
        self.kinds: Dict[str, ComponentKind] = {}

    def register(self, kind: ComponentKind) -> None:
        """Register a component kind; re-registering a name is ignored."""
        if kind.name in self.kinds:
            logger.warning("kind_already_registered", kind=kind.name)
            return
        self.kinds[kind.name] = kind
        logger.debug("kind_registered", kind=kind.name, properties=len(kind.properties))

    def get(self, name: str) -> Optional[ComponentKind]:
        return self.kinds.get(name)

    def has(self, name: str) -> bool:
        return name in self.kinds

    def names(self, category: Optional[KindCategory] = None) -> List[str]:
        """Registered kind names in registration order, optionally filtered."""
        return [k.name for k in self.kinds.values() if category is None or k.category == category]

    def property_names(self, name: str) -> List[str]:
        kind = self.kinds.get(name)
        return [p.name for p in kind.properties] if kind else []

    def validate_properties(self, name: str, properties: Dict[str, Any]) -> List[str]:
        """
        Check a property map against the kind's declared shapes.

        Properties the kind does not declare are accepted (pass-through
        attributes such as ``className`` or ``aria-label``).

        Args:
            name: Component kind
            properties: Property map to check

        Returns:
            Human-readable problems, empty when the map is acceptable
        """
        kind = self.kinds.get(name)
        if kind is None:
            return [f"unknown component kind '{name}'"]

        problems: List[str] = []
        for spec in kind.properties:
            if spec.name not in properties or properties[spec.name] is None:
                if spec.required:
                    problems.append(f"{name}.{spec.name} is required")
                continue
            problems.extend(self._check_value(name, spec, properties[spec.name]))
        return problems

    @staticmethod
    def _check_value(kind: str, spec: PropertySpec, value: Any) -> List[str]:
        label = f"{kind}.{spec.name}"
        if not _matches_type(value, spec.type):
            return [f"{label} must be {spec.type.value}, got {type(value).__name__}"]

        problems = []
        if spec.choices is not None and value not in spec.choices:
            problems.append(f"{label} must be one of {spec.choices}, got {value!r}")
        if isinstance(value, list):
            if spec.min_items is not None and len(value) < spec.min_items:
                problems.append(f"{label} needs at least {spec.min_items} items")
            if spec.max_items is not None and len(value) > spec.max_items:
                problems.append(f"{label} allows at most {spec.max_items} items")
        if spec.type == PropertyType.NUMBER:
            if spec.minimum is not None and value < spec.minimum:
                problems.append(f"{label} must be >= {spec.minimum}")
            if spec.maximum is not None and value > spec.maximum:
                problems.append(f"{label} must be <= {spec.maximum}")
        return problems
