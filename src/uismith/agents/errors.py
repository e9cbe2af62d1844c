"""Error types raised or returned by the pipeline stages."""

from dataclasses import dataclass
from enum import Enum


class GenerationErrorCode(str, Enum):
    NO_PRIOR_SPECIFICATION = "NO_PRIOR_SPECIFICATION"
    UNCLASSIFIED_REQUEST = "UNCLASSIFIED_REQUEST"
    INTERNAL_FAILURE = "INTERNAL_FAILURE"


@dataclass(frozen=True)
class GenerationError:
    """Generation failure (Failure payload of ``UIArchitect.generate``)."""

    code: GenerationErrorCode
    message: str


class SpecificationFormatError(ValueError):
    """Serialized specification could not be parsed."""

    pass


class ExportError(Exception):
    """Specification cannot be rendered to the requested export format."""

    def __init__(self, message: str, kind: str | None = None) -> None:
        super().__init__(message)
        self.kind = kind
