"""Component kind registry."""

from .types import ComponentKind, KindCategory, PropertySpec, PropertyType
from .components import ComponentRegistry
from .builtin import BUILTIN_KINDS, create_default_registry

__all__ = [
    "ComponentKind",
    "KindCategory",
    "PropertySpec",
    "PropertyType",
    "ComponentRegistry",
    "BUILTIN_KINDS",
    "create_default_registry",
]
