"""Rule Book - keyed handler tables for per-component checks and fixes."""

from collections import defaultdict
from collections.abc import Callable, Iterable
from typing import Any, Generic, TypeVar

from .models import ComponentNode

T = TypeVar("T")

Handler = Callable[[ComponentNode, int], Iterable[T]]


class RuleBook(Generic[T]):
    """
    Table of handlers keyed by component kind (or rule id).

    Each handler receives the component and its index and yields zero or
    more findings. Several handlers may share a key; they run in
    registration order.

    Examples:
        >>> book = RuleBook[str]("demo")
        >>> @book.register("Button")
        ... def check(component, index):
        ...     yield f"button at {index}"
        >>> book.evaluate(ComponentNode(kind="Button"), 0)
        ['button at 0']
    """

    def __init__(self, name: str) -> None:
        self.name = name
        self._handlers: dict[str, list[Handler[T]]] = defaultdict(list)

    def register(self, key: str) -> Callable[[Handler[T]], Handler[T]]:
        def decorator(handler: Handler[T]) -> Handler[T]:
            self._handlers[key].append(handler)
            return handler

        return decorator

    def keys(self) -> list[str]:
        return [key for key, handlers in self._handlers.items() if handlers]

    def __contains__(self, key: str) -> bool:
        return bool(self._handlers.get(key))

    def run(self, key: str, component: ComponentNode, index: int) -> list[T]:
        findings: list[T] = []
        for handler in self._handlers.get(key, ()):
            findings.extend(handler(component, index))
        return findings

    def evaluate(self, component: ComponentNode, index: int) -> list[T]:
        """Run the handlers registered for the component's kind."""
        return self.run(component.kind, component, index)


# ============================================================================
# Property helpers shared by the rule catalogs
# ============================================================================


def text_of(properties: dict[str, Any], *names: str) -> str | None:
    """First non-blank string among the named properties."""
    for name in names:
        match properties.get(name):
            case str(value) if value.strip():
                return value
    return None


def is_false(properties: dict[str, Any], name: str) -> bool:
    return properties.get(name) is False


def present(properties: dict[str, Any], name: str) -> bool:
    """Property set to something other than null, false or an empty string."""
    match properties.get(name):
        case None | False | "":
            return False
        case _:
            return True


def items_of(properties: dict[str, Any], name: str) -> list[Any]:
    match properties.get(name):
        case list(items):
            return items
        case _:
            return []


def mappings_of(properties: dict[str, Any], name: str) -> list[dict[str, Any]]:
    """Only the object entries of a list property."""
    return [item for item in items_of(properties, name) if isinstance(item, dict)]
