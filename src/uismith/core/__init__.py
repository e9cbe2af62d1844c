"""Core utilities and infrastructure."""

from .config import Settings, get_settings
from .validate import (
    ValidationError,
    ValidationResult,
    PipelineRequest,
    SpecificationValidator,
    validate_request,
    validate_specification,
)
from .logging_config import configure_logging, get_logger, LogContext
from .json import (
    extract_json,
    safe_json_dumps,
    JSONParseError,
    validate_json_size,
    validate_json_depth,
)
from .hash import Algorithm, hash_string, hash_bytes, hash_fields
from .cache import LRUCache, Stats
from .id import (
    new_conversation_id,
    new_message_id,
    new_plan_id,
    new_specification_id,
    is_valid,
    extract_timestamp,
)


def create_container(settings: Settings | None = None):
    """Create dependency injection container (lazy import to avoid circular deps)."""
    from .container import create_container as _create_container

    return _create_container(settings)


__all__ = [
    # Config
    "Settings",
    "get_settings",
    # Validation
    "ValidationError",
    "ValidationResult",
    "PipelineRequest",
    "SpecificationValidator",
    "validate_request",
    "validate_specification",
    # Logging
    "configure_logging",
    "get_logger",
    "LogContext",
    # JSON
    "extract_json",
    "safe_json_dumps",
    "JSONParseError",
    "validate_json_size",
    "validate_json_depth",
    # DI
    "create_container",
    # Hashing
    "Algorithm",
    "hash_string",
    "hash_bytes",
    "hash_fields",
    # Caching
    "LRUCache",
    "Stats",
    # IDs
    "new_conversation_id",
    "new_message_id",
    "new_plan_id",
    "new_specification_id",
    "is_valid",
    "extract_timestamp",
]
