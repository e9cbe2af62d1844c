"""Dependency Injection Container."""

from injector import Injector, Module, provider, singleton

from ..agents.accessibility import AccessibilityValidator
from ..agents.architect import UIArchitect
from ..agents.critic import DesignCritic
from ..agents.exporter import Exporter
from ..agents.models import OrchestratorOptions
from ..agents.orchestrator import Orchestrator
from ..monitoring.metrics import MetricsCollector, metrics_collector
from ..providers import ProviderRegistry, create_default_providers
from ..registry import ComponentRegistry, create_default_registry
from .config import Settings, get_settings


class CoreModule(Module):
    """Core dependencies."""

    def __init__(self, settings: Settings | None = None) -> None:
        self.settings = settings

    @singleton
    @provider
    def provide_settings(self) -> Settings:
        return self.settings or get_settings()

    @singleton
    @provider
    def provide_metrics(self) -> MetricsCollector:
        """Process-wide collector on the default Prometheus registry."""
        return metrics_collector

    @singleton
    @provider
    def provide_component_registry(self) -> ComponentRegistry:
        """Provide component kind registry singleton."""
        return create_default_registry()

    @singleton
    @provider
    def provide_provider_registry(self) -> ProviderRegistry:
        """Provide capability provider registry singleton."""
        return create_default_providers()

    @singleton
    @provider
    def provide_architect(self, registry: ComponentRegistry) -> UIArchitect:
        return UIArchitect(registry)

    @singleton
    @provider
    def provide_critic(self, providers: ProviderRegistry) -> DesignCritic:
        return DesignCritic(providers=providers)

    @singleton
    @provider
    def provide_validator(self, registry: ComponentRegistry, providers: ProviderRegistry) -> AccessibilityValidator:
        return AccessibilityValidator(registry=registry, providers=providers)

    @singleton
    @provider
    def provide_exporter(self, settings: Settings, metrics: MetricsCollector) -> Exporter:
        """Provide exporter with a shared package cache."""
        return Exporter(
            enable_cache=settings.enable_export_cache,
            cache_size=settings.export_cache_size,
            metrics=metrics,
        )

    @provider
    def provide_options(self, settings: Settings) -> OrchestratorOptions:
        return OrchestratorOptions.from_settings(settings)

    @provider
    def provide_orchestrator(
        self,
        architect: UIArchitect,
        critic: DesignCritic,
        validator: AccessibilityValidator,
        exporter: Exporter,
        options: OrchestratorOptions,
        settings: Settings,
        metrics: MetricsCollector,
    ) -> Orchestrator:
        """Provide a fresh orchestrator (one per conversation) over the shared stages."""
        return Orchestrator(
            architect=architect,
            critic=critic,
            validator=validator,
            exporter=exporter,
            options=options,
            settings=settings,
            metrics=metrics,
        )


def create_container(settings: Settings | None = None) -> Injector:
    """Create configured injector."""
    return Injector([CoreModule(settings)])
