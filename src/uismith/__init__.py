"""
UI-Smith
Rule-based UI specification pipeline: generate, critique, validate, export
"""

__version__ = "0.1.0"

from .agents import (
    Orchestrator,
    OrchestratorOptions,
    PipelineResult,
    Specification,
    create_orchestrator,
    generate_ui,
)

__all__ = [
    "Orchestrator",
    "OrchestratorOptions",
    "PipelineResult",
    "Specification",
    "create_orchestrator",
    "generate_ui",
]
