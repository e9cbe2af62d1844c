"""Input validation for pipeline requests and serialized specifications."""

from dataclasses import dataclass
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic import ValidationError as PydanticValidationError
from returns.result import Failure, Result, Success

from .id import Prefix, extract_prefix, has_prefix
from .json import JSONParseError, validate_json_depth, validate_json_size


# Validation limits
MAX_REQUEST_LENGTH = 2_000
MAX_SPECIFICATION_SIZE = 512 * 1024  # 512KB
MAX_JSON_DEPTH = 20
MAX_COMPONENTS = 200


class ValidationError(Exception):
    """Validation failed."""

    pass


@dataclass(frozen=True)
class ValidationResult:
    """Validation error with details (for Result pattern)."""

    message: str
    field: str | None = None
    value: Any | None = None


class RequestValidator(BaseModel):
    """Base validator with strict configuration."""

    model_config = ConfigDict(strict=True, validate_assignment=True, extra="forbid", frozen=True)


class PipelineRequest(RequestValidator):
    """Validated pipeline request.

    Blank text is allowed through: deciding what an empty request means
    is the generation stage's job, not the validator's.
    """

    message: str = Field(max_length=MAX_REQUEST_LENGTH)

    @field_validator("message")
    @classmethod
    def strip_message(cls, v: str) -> str:
        return v.strip()


def validate_request(message: str, max_length: int = MAX_REQUEST_LENGTH) -> Result[str, ValidationResult]:
    """
    Validate raw request text (Result pattern).

    Args:
        message: Request text as typed by the user
        max_length: Configured upper bound, may be tighter than the model limit

    Returns:
        Success with the normalised text, or Failure describing the problem
    """
    if not isinstance(message, str):
        return Failure(ValidationResult("Request must be a string", "message", type(message).__name__))
    if len(message) > max_length:
        return Failure(
            ValidationResult(f"Request is {len(message)} characters, maximum is {max_length}", "message")
        )
    try:
        return Success(PipelineRequest(message=message).message)
    except PydanticValidationError as e:
        return Failure(ValidationResult(str(e), "message"))


class SpecificationValidator:
    """Structural checks on a serialized specification before model parsing."""

    @staticmethod
    def validate(spec_dict: dict[str, Any], spec_json: str) -> None:
        """
        Validate a parsed specification dictionary.

        Raises:
            ValidationError: If validation fails
        """
        try:
            validate_json_size(spec_json, MAX_SPECIFICATION_SIZE, "Specification")
            validate_json_depth(spec_dict, MAX_JSON_DEPTH)
        except JSONParseError as e:
            raise ValidationError(str(e)) from e

        if "components" not in spec_dict:
            raise ValidationError("Specification missing required 'components' field")

        spec_id = spec_dict.get("id")
        if spec_id is not None and not (isinstance(spec_id, str) and has_prefix(spec_id, Prefix.SPECIFICATION)):
            found = extract_prefix(spec_id) if isinstance(spec_id, str) else None
            raise ValidationError(
                f"Specification id must be a '{Prefix.SPECIFICATION}_' ID, got prefix {found!r}"
            )

        components = spec_dict["components"]
        if not isinstance(components, list):
            raise ValidationError("Specification 'components' must be a list")
        if len(components) > MAX_COMPONENTS:
            raise ValidationError(f"Specification has {len(components)} components, maximum is {MAX_COMPONENTS}")

        for index, component in enumerate(components):
            if not isinstance(component, dict):
                raise ValidationError(f"Component {index} must be an object")
            kind = component.get("kind")
            if not isinstance(kind, str) or not kind:
                raise ValidationError(f"Component {index} is missing a non-empty 'kind'")


def validate_specification(spec: dict[str, Any], json_str: str) -> Result[None, ValidationResult]:
    """Validate a serialized specification (Result pattern version)."""
    try:
        SpecificationValidator.validate(spec, json_str)
        return Success(None)
    except ValidationError as e:
        return Failure(ValidationResult(str(e)))
