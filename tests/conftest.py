"""Pytest configuration and fixtures."""

import os

import pytest
from prometheus_client import CollectorRegistry

from uismith.agents import (
    AccessibilityValidator,
    DesignCritic,
    Exporter,
    Orchestrator,
    OrchestratorOptions,
    UIArchitect,
)
from uismith.core import Settings, configure_logging, create_container
from uismith.monitoring import MetricsCollector
from uismith.providers import create_default_providers
from uismith.registry import create_default_registry

# Bind the log handler once, before any test swaps out stderr
configure_logging("DEBUG")


# ============================================================================
# Pytest Hooks
# ============================================================================


def pytest_configure(config):
    """Configure pytest with environment variables."""
    os.environ["UISMITH_LOG_LEVEL"] = "DEBUG"
    os.environ["UISMITH_STAGE_TIMEOUT"] = "5.0"
    os.environ["UISMITH_EXPORT_CACHE_SIZE"] = "16"


# ============================================================================
# Core Fixtures
# ============================================================================


@pytest.fixture
def settings():
    """Fresh settings (bypasses the cached instance)."""
    return Settings()


@pytest.fixture
def di_container(settings):
    """Dependency injection container for testing."""
    return create_container(settings)


@pytest.fixture
def metrics():
    """Metrics collector on a private registry."""
    return MetricsCollector(registry=CollectorRegistry())


# ============================================================================
# Registry Fixtures
# ============================================================================


@pytest.fixture
def registry():
    return create_default_registry()


@pytest.fixture
def providers():
    return create_default_providers()


# ============================================================================
# Stage Fixtures
# ============================================================================


@pytest.fixture
def architect(registry):
    return UIArchitect(registry)


@pytest.fixture
def critic(providers):
    return DesignCritic(providers=providers)


@pytest.fixture
def validator(registry, providers):
    return AccessibilityValidator(registry=registry, providers=providers)


@pytest.fixture
def exporter(metrics):
    return Exporter(enable_cache=True, cache_size=16, metrics=metrics)


@pytest.fixture
def options():
    return OrchestratorOptions()


@pytest.fixture
def orchestrator(architect, critic, validator, exporter, options, settings, metrics):
    """Orchestrator wired to the test stages with isolated metrics."""
    return Orchestrator(
        architect=architect,
        critic=critic,
        validator=validator,
        exporter=exporter,
        options=options,
        settings=settings,
        metrics=metrics,
    )
