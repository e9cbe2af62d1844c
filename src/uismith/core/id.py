"""ID Generation.

ULID-based identifiers for specifications, conversations, pipeline
messages and orchestration plans.

- K-sortable: IDs created later compare greater
- Prefixed: ``ui_``, ``conv_``, ``msg_``, ``plan_`` make logs readable
- Typed: NewType wrappers keep the categories apart for type checkers
"""

from datetime import datetime, timezone
from typing import NewType
from ulid import ULID

# ============================================================================
# Type-Safe ID Wrappers
# ============================================================================

SpecificationID = NewType("SpecificationID", str)
"""UI specification identifier (changes on every revision)"""

ConversationID = NewType("ConversationID", str)
"""Orchestrator conversation identifier"""

MessageID = NewType("MessageID", str)
"""Pipeline message identifier"""

PlanID = NewType("PlanID", str)
"""Orchestration plan identifier"""


class Prefix:
    """ID prefix constants."""

    SPECIFICATION = "ui"
    CONVERSATION = "conv"
    MESSAGE = "msg"
    PLAN = "plan"


# ============================================================================
# ULID Generator
# ============================================================================


class Generator:
    """ULID generator with optional prefixes."""

    def generate(self) -> str:
        return str(ULID())

    def generate_with_prefix(self, prefix: str) -> str:
        return f"{prefix}_{self.generate()}"

    def timestamp(self, id_str: str) -> int:
        """Extract timestamp (milliseconds) from a ULID, 0 if unparsable."""
        try:
            ulid = ULID.from_str(_strip_prefix(id_str))
            return int(ulid.timestamp * 1000)
        except ValueError:
            return 0


def _strip_prefix(id_str: str) -> str:
    return id_str.rsplit("_", 1)[-1]


_generator = Generator()


def new_specification_id() -> SpecificationID:
    return SpecificationID(_generator.generate_with_prefix(Prefix.SPECIFICATION))


def new_conversation_id() -> ConversationID:
    return ConversationID(_generator.generate_with_prefix(Prefix.CONVERSATION))


def new_message_id() -> MessageID:
    return MessageID(_generator.generate_with_prefix(Prefix.MESSAGE))


def new_plan_id() -> PlanID:
    return PlanID(_generator.generate_with_prefix(Prefix.PLAN))


# ============================================================================
# Validation and Parsing
# ============================================================================


def is_valid(id_str: str) -> bool:
    """Check if string is a valid (optionally prefixed) ULID.

    Args:
        id_str: ID string to validate

    Returns:
        True if the ULID part parses
    """
    ulid_part = _strip_prefix(id_str)
    if len(ulid_part) != 26:
        return False
    try:
        ULID.from_str(ulid_part)
    except ValueError:
        return False
    return True


def extract_timestamp(id_str: str) -> datetime | None:
    """Extract the creation time encoded in an ID.

    Args:
        id_str: ULID string, prefixed or not

    Returns:
        UTC datetime or None if invalid
    """
    timestamp_ms = _generator.timestamp(id_str)
    if timestamp_ms <= 0:
        return None
    return datetime.fromtimestamp(timestamp_ms / 1000.0, tz=timezone.utc)


def extract_prefix(id_str: str) -> str | None:
    """Extract prefix from prefixed ID, None when there is none."""
    parts = id_str.split("_")
    return parts[0] if len(parts) == 2 else None


def has_prefix(id_str: str, prefix: str) -> bool:
    """Check that an ID carries the given prefix and a valid ULID."""
    return id_str.startswith(f"{prefix}_") and is_valid(id_str)
