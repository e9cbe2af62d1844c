"""
Base Capability Provider
Abstract base class for the read-only knowledge sources the stages consult
"""

from abc import ABC, abstractmethod
from typing import List, Optional

from pydantic import BaseModel, Field

from ..core.logging_config import get_logger

logger = get_logger(__name__)


class ProviderInfo(BaseModel):
    """Provider definition"""
    id: str = Field(..., description="Unique provider identifier")
    name: str
    description: str
    topics: List[str] = Field(default_factory=list)


class BaseProvider(ABC):
    """
    Abstract base class for capability providers.
    Providers answer topic lookups with narrative text; they never
    decide anything on behalf of a stage.
    """

    @abstractmethod
    def definition(self) -> ProviderInfo:
        """Return provider definition with the topics it covers"""
        pass

    @abstractmethod
    def describe(self, topic: str) -> Optional[str]:
        """
        Look up narrative text for a topic.

        Args:
            topic: Provider-specific topic key (e.g. "button-name")

        Returns:
            Text for the topic, or None if the provider has nothing on it
        """
        pass

    def covers(self, topic: str) -> bool:
        return topic in self.definition().topics
