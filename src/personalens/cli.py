"""CLI application for PersonaLens."""

import asyncio
import json
from pathlib import Path

import typer
from rich.console import Console
from rich.table import Table

from personalens.errors import PipelineError
from personalens.llm import GeminiClient, TextGenerator
from personalens.personas.models import AnalysisResult

app = typer.Typer(help="PersonaLens: LLM-assisted customer segmentation and personas")
console = Console()


def build_text_generator() -> TextGenerator:
    """Create the LLM client used by `analyze`."""
    return GeminiClient()


@app.command()
def serve(
    host: str = "0.0.0.0",
    port: int = 9010,
    reload: bool = False,
) -> None:
    """Start the FastAPI server."""
    import uvicorn

    console.print(f"[bold green]Starting PersonaLens API on {host}:{port}[/bold green]")
    uvicorn.run(
        "personalens.api.main:app",
        host=host,
        port=port,
        reload=reload,
    )


@app.command()
def version() -> None:
    """Show version information."""
    from personalens import __version__

    console.print(f"[bold]PersonaLens[/bold] version [green]{__version__}[/green]")


@app.command()
def analyze(
    csv_path: Path = typer.Argument(
        ...,
        help="Path to a customer CSV file with a header row",
        exists=True,
        file_okay=True,
        dir_okay=False,
    ),
    output: Path | None = typer.Option(
        None,
        "--output",
        "-o",
        help="Write the analysis result as JSON to this path",
    ),
    sample_size: int = typer.Option(
        20,
        "--sample-size",
        min=1,
        help="Number of leading rows shown to the LLM for k estimation",
    ),
) -> None:
    """Cluster a CSV of customers and synthesize a persona per cluster."""
    from personalens.etl import load_records_from_path
    from personalens.personas import PersonaPipeline, PipelineConfig

    async def _analyze() -> AnalysisResult:
        config = PipelineConfig(sample_size=sample_size)
        records = load_records_from_path(csv_path, id_field=config.id_field)
        console.print(f"[bold blue]Analyzing {len(records):,} customers from {csv_path.name}...[/bold blue]")

        async with build_text_generator() as llm:
            return await PersonaPipeline(llm=llm, config=config).run(records)

    try:
        result = asyncio.run(_analyze())
    except KeyboardInterrupt:
        console.print("\n[bold red]Interrupted by user[/bold red]")
        raise typer.Exit(1)
    except PipelineError as e:
        console.print(f"\n[bold red]Error ({e.code}):[/bold red] {e}")
        raise typer.Exit(1)

    print_result(result)

    if output:
        output.write_text(json.dumps(result.to_dict(), indent=2), encoding="utf-8")
        console.print(f"[bold green]✓ Wrote result to {output}[/bold green]")


def print_result(result: AnalysisResult) -> None:
    """Render an analysis result as a k summary and a persona table."""
    console.print(f"\n[bold]Estimated k:[/bold] {result.k_estimation.k}")
    console.print(f"[dim]{result.k_estimation.reasoning}[/dim]\n")

    table = Table(title=f"{len(result.personas)} Personas")
    table.add_column("Cluster", justify="right")
    table.add_column("Persona", style="bold")
    table.add_column("Description")
    table.add_column("Marketing Strategy")
    for persona in result.personas:
        table.add_row(
            str(persona.cluster_id),
            persona.persona_name,
            persona.description,
            persona.marketing_strategy,
        )
    console.print(table)


if __name__ == "__main__":
    app()
