"""
Provider Registry
Routes topic lookups to capability providers
"""

from typing import Dict, List, Optional

from ..core.logging_config import get_logger
from .base import BaseProvider, ProviderInfo

logger = get_logger(__name__)


class ProviderRegistry:
    """
    Central registry for capability providers.
    A lookup never raises: a missing or failing provider yields None and
    the calling stage simply goes without the extra text.
    """

    def __init__(self) -> None:
        self.providers: Dict[str, BaseProvider] = {}

    def register(self, provider: BaseProvider) -> None:
        definition = provider.definition()
        if definition.id in self.providers:
            logger.warning("provider_already_registered", provider=definition.id)
            return
        self.providers[definition.id] = provider
        logger.debug("provider_registered", provider=definition.id, topics=len(definition.topics))

    def get(self, provider_id: str) -> Optional[BaseProvider]:
        return self.providers.get(provider_id)

    def list_all(self) -> List[ProviderInfo]:
        return [p.definition() for p in self.providers.values()]

    def lookup(self, provider_id: str, topic: str) -> Optional[str]:
        """
        Ask one provider about a topic.

        Args:
            provider_id: Registered provider id (e.g. "layout-rules")
            topic: Topic key understood by that provider

        Returns:
            Narrative text or None
        """
        provider = self.providers.get(provider_id)
        if provider is None:
            logger.debug("provider_missing", provider=provider_id, topic=topic)
            return None

        try:
            return provider.describe(topic)
        except Exception as e:
            logger.error("provider_lookup_failed", provider=provider_id, topic=topic, error=str(e), exc_info=True)
            return None
