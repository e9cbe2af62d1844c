"""
UI-Smith command line.

Commands:
- generate: run a request through the pipeline and print or write the result
- plan: show the steps a request would run
"""

from pathlib import Path

import typer

from .agents.models import ExportFormat, ExportOptions, PipelineResult
from .agents.orchestrator import create_orchestrator
from .core.config import get_settings
from .core.json import safe_json_dumps
from .core.logging_config import configure_logging

app = typer.Typer(
    help="Generate UI specifications and export them as code.",
    no_args_is_help=True,
)


@app.callback()
def main(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Log at DEBUG level"),
) -> None:
    settings = get_settings()
    configure_logging("DEBUG" if verbose else settings.log_level, settings.json_logs)


def _summary(result: PipelineResult) -> str:
    lines = [f"state: {result.state.value}", f"success: {str(result.success).lower()}"]
    if result.specification is not None:
        spec = result.specification
        lines.append(f"specification: {spec.name} (v{spec.metadata.version}, {spec.id})")
        lines.extend(f"  - {kind}" for kind in spec.kinds())
    if result.design_feedback is not None:
        lines.append(f"design score: {result.design_feedback.score}")
    if result.accessibility_report is not None:
        report = result.accessibility_report
        lines.append(f"accessibility score: {report.score} ({'passed' if report.passed else 'failed'})")
    if result.export_package is not None:
        lines.append("files:")
        lines.extend(f"  - {f.name}" for f in result.export_package.files)
    for error in result.errors:
        marker = "error" if error.fatal else "warning"
        lines.append(f"{marker}: [{error.stage.value}] {error.code}: {error.message}")
    return "\n".join(lines)


@app.command("generate")
def generate(
    request: str = typer.Argument(..., help="What to build, e.g. 'Create a SaaS pricing page'"),
    out: Path = typer.Option(None, "--out", "-o", help="Directory to write exported files to"),
    as_json: bool = typer.Option(False, "--json", help="Print the full result as JSON"),
    format: ExportFormat = typer.Option(None, "--format", "-f", help="Export format"),
    framework: str = typer.Option(None, "--framework", help="Target framework: nextjs, vite or cra"),
    no_export: bool = typer.Option(False, "--no-export", help="Stop after validation"),
) -> None:
    """Run one request through generation, critique, validation and export.

    Examples:
        uismith generate "Create a SaaS pricing page"
        uismith generate "Build a dashboard" --format storybook --out ./ui
        uismith generate "Contact form" --json
    """
    orchestrator = create_orchestrator()
    options = orchestrator.options

    overrides = {}
    if format is not None:
        overrides["format"] = format
    if framework is not None:
        if framework not in ("nextjs", "vite", "cra"):
            typer.echo(f"Unknown framework: {framework}", err=True)
            raise typer.Exit(code=2)
        overrides["framework"] = framework
    export_options = ExportOptions(**{**options.export_options.model_dump(), **overrides})
    orchestrator.options = options.model_copy(
        update={"export_options": export_options, "export_on_success": options.export_on_success and not no_export}
    )

    result = orchestrator.process_request(request)

    if as_json:
        typer.echo(safe_json_dumps(result.model_dump(mode="json"), indent=2))
    else:
        typer.echo(_summary(result))

    if out is not None and result.export_package is not None:
        out.mkdir(parents=True, exist_ok=True)
        for file in result.export_package.files:
            (out / file.name).write_text(file.content, encoding="utf-8")
        typer.echo(f"Wrote {len(result.export_package.files)} file(s) to {out}", err=True)

    if not result.success:
        raise typer.Exit(code=1)


@app.command("plan")
def plan(
    request: str = typer.Argument(..., help="Request to plan"),
) -> None:
    """Show the stages a request would run with the current settings."""
    orchestration = create_orchestrator().create_plan(request)
    for step in orchestration.steps:
        required = "required" if step.required else "optional"
        depends = f" after {', '.join(map(str, step.depends_on))}" if step.depends_on else ""
        typer.echo(f"{step.order}. {step.agent.value}: {step.action.value} ({required}){depends}")
    typer.echo(f"estimated: {orchestration.estimated_duration_ms} ms")


if __name__ == "__main__":
    app()
