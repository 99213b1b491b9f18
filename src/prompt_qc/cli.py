"""CLI interface using typer + rich."""

from __future__ import annotations

import asyncio
import json
import logging
from pathlib import Path

from dotenv import load_dotenv

load_dotenv()

import typer
from pydantic import ValidationError
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from prompt_qc.clients.agent_client import AgentServiceClient
from prompt_qc.config import load_config, load_quality_config
from prompt_qc.harness.agent_tester import AgentTestHarness
from prompt_qc.models.agent import AgentPrompt
from prompt_qc.models.report import TestResult
from prompt_qc.quality.evaluator import evaluate_prompt_quality
from prompt_qc.quality.validator import QualityValidator
from prompt_qc.report.renderer import render_report_markdown, save_report

app = typer.Typer(
    name="prompt-qc",
    help="Prompt quality control and agent testing",
    no_args_is_help=True,
)
console = Console()

STATUS_STYLES = {"pass": "green", "fail": "red", "warning": "yellow"}


def _setup_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def _load_validator(config_path: Path) -> QualityValidator:
    try:
        return QualityValidator(load_quality_config(config_path))
    except FileNotFoundError as exc:
        console.print(f"[red]{exc}[/red]")
        raise typer.Exit(1)
    except ValidationError as exc:
        console.print(f"[red]Invalid quality config: {exc}[/red]")
        raise typer.Exit(1)


def _print_results(results: list[TestResult]) -> None:
    table = Table(title="Test Results")
    table.add_column("Status")
    table.add_column("Test", style="bold")
    table.add_column("Message")
    for r in results:
        style = STATUS_STYLES[r.status]
        table.add_row(f"[{style}]{r.status.upper()}[/{style}]", r.test, r.message)
    console.print(table)


@app.command()
def validate(
    config: Path = typer.Argument(help="Quality rules file (YAML/JSON)"),
    content: Path = typer.Argument(help="Content file to validate"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Verbose logging"),
) -> None:
    """Validate a content file against quality rules."""
    _setup_logging(verbose)
    if not content.exists():
        console.print(f"[red]Content file not found: {content}[/red]")
        raise typer.Exit(1)

    validator = _load_validator(config)
    result = validator.validate(content.read_text(encoding="utf-8"))

    color = "green" if result.passed else "yellow"
    console.print(Panel(
        f"[bold {color}]Score: {result.score:.2f}[/bold {color}]\n"
        f"Controls: {validator.get_summary()}",
        title="Passed" if result.passed else "Issues found",
    ))
    for issue in result.issues:
        console.print(f"  - {issue}")
    if not result.passed:
        raise typer.Exit(2)


@app.command()
def instructions(
    config: Path = typer.Argument(help="Quality rules file (YAML/JSON)"),
) -> None:
    """Print the quality instruction block for a rules file."""
    validator = _load_validator(config)
    text = validator.get_quality_instructions().strip()
    if not text:
        console.print("[yellow]No quality controls configured.[/yellow]")
        return
    console.print(text, markup=False, highlight=False)


@app.command()
def evaluate(
    prompt_file: Path = typer.Argument(help="JSON file with one agent prompt record"),
) -> None:
    """Score a stored agent prompt on clarity, usefulness, uniqueness and SEO."""
    if not prompt_file.exists():
        console.print(f"[red]File not found: {prompt_file}[/red]")
        raise typer.Exit(1)
    try:
        prompt = AgentPrompt.model_validate(json.loads(prompt_file.read_text(encoding="utf-8")))
    except (json.JSONDecodeError, ValidationError) as exc:
        console.print(f"[red]Invalid prompt record: {exc}[/red]")
        raise typer.Exit(1)

    m = evaluate_prompt_quality(prompt)
    console.print(Panel(
        f"Clarity: {m.clarity:.0f} | Usefulness: {m.usefulness:.0f} | "
        f"Uniqueness: {m.uniqueness:.0f} | SEO: {m.seo_optimization:.0f}\n"
        f"[bold]Overall: {m.overall:.1f}[/bold]",
        title=f"Quality: {prompt.topic or prompt.id}",
    ))


@app.command("test-agent")
def test_agent(
    agent_id: str = typer.Argument(help="Agent id"),
    keyword: list[str] = typer.Option(..., "--keyword", "-k", help="Test keyword (repeatable)"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Verbose logging"),
) -> None:
    """Run the generation test battery against an agent."""
    _setup_logging(verbose)
    config = load_config()

    async def _run() -> list[TestResult]:
        async with AgentServiceClient(
            config.service.base_url, timeout=config.service.timeout
        ) as client:
            harness = AgentTestHarness(client, config.harness)
            return await harness.test_agent_generation(agent_id, keyword)

    with console.status("Testing agent..."):
        results = asyncio.run(_run())
    _print_results(results)
    if any(r.status == "fail" for r in results):
        raise typer.Exit(2)


@app.command()
def report(
    agent_id: str = typer.Argument(help="Agent id"),
    output: Path = typer.Option(None, "--output", "-o", help="Write Markdown report to this path"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Verbose logging"),
) -> None:
    """Generate a full test report with quality metrics and recommendations."""
    _setup_logging(verbose)
    config = load_config()

    async def _run():
        async with AgentServiceClient(
            config.service.base_url, timeout=config.service.timeout
        ) as client:
            harness = AgentTestHarness(client, config.harness)
            return await harness.generate_test_report(agent_id)

    with console.status("Generating report..."):
        result = asyncio.run(_run())

    _print_results(result.results)
    m = result.quality_metrics
    if m is not None:
        console.print(Panel(
            f"Clarity: {m.clarity:.1f} | Usefulness: {m.usefulness:.1f} | "
            f"Uniqueness: {m.uniqueness:.1f} | SEO: {m.seo_optimization:.1f}\n"
            f"[bold]Overall: {m.overall:.1f}[/bold]",
            title="Quality Metrics",
        ))
    if result.recommendations:
        console.print("\n[yellow]Recommendations:[/yellow]")
        for rec in result.recommendations:
            console.print(f"  - {rec}")

    if output is not None:
        path = save_report(render_report_markdown(result), str(output))
        console.print(f"\n[green]Report saved: {path}[/green]")

    if result.failed:
        raise typer.Exit(2)


if __name__ == "__main__":
    app()
