"""CLI entry point for Smart Allocation."""

import logging
import time
from pathlib import Path
from typing import Annotated

from dotenv import load_dotenv

# Load environment variables from .env.local
# Path: main.py -> smart_allocation/ -> src/ -> project root
load_dotenv(Path(__file__).parent.parent.parent / ".env.local")

import typer  # noqa: E402
from pydantic import ValidationError  # noqa: E402
from rich.console import Console  # noqa: E402
from rich.logging import RichHandler  # noqa: E402
from rich.panel import Panel  # noqa: E402
from rich.table import Table  # noqa: E402

from smart_allocation.config import get_settings  # noqa: E402
from smart_allocation.engine import match_pool  # noqa: E402
from smart_allocation.graph.workflow import run_allocation  # noqa: E402
from smart_allocation.models.pool import CandidatePool  # noqa: E402
from smart_allocation.output.csv_export import save_csv, to_csv  # noqa: E402
from smart_allocation.output.markdown import (  # noqa: E402
    format_allocation,
    format_edge,
    save_markdown,
)


def format_time(seconds: float) -> str:
    """Format seconds into human-readable time."""
    if seconds < 60:
        return f"{seconds:.1f}s"
    minutes = int(seconds // 60)
    secs = seconds % 60
    return f"{minutes}m {secs:.0f}s"


app = typer.Typer(
    name="smart-allocation",
    help="Smart Allocation - match candidates to capacity-limited opportunities",
    add_completion=False,
)
console = Console()


def configure_logging(verbose: bool = False) -> None:
    """Route library logging through rich at the configured level."""
    level = "DEBUG" if verbose else get_settings().log_level
    logging.basicConfig(
        level=level,
        format="%(message)s",
        handlers=[RichHandler(console=console, show_path=False)],
        force=True,
    )


def load_pool(path: Path) -> CandidatePool:
    """Read and validate a candidate/opportunity pool JSON file."""
    if not path.exists():
        console.print(f"[red]Error:[/red] File not found: {path}")
        raise typer.Exit(1)
    try:
        return CandidatePool.from_json_file(path)
    except ValidationError as e:
        console.print(f"[red]Invalid pool file:[/red] {path}")
        for error in e.errors():
            location = ".".join(str(part) for part in error["loc"])
            console.print(f"  - {location or 'pool'}: {error['msg']}")
        raise typer.Exit(1) from e


@app.command()
def allocate(
    pool: Annotated[Path, typer.Argument(help="Path to pool JSON (candidates + opportunities)")],
    seed: Annotated[
        int | None,
        typer.Option("--seed", "-s", help="Seed for shape scoring (default from settings)"),
    ] = None,
    csv_output: Annotated[
        Path | None, typer.Option("--csv", help="Write accepted matches as CSV")
    ] = None,
    output: Annotated[
        Path | None, typer.Option("--output", "-o", help="Write a markdown report")
    ] = None,
    verbose: Annotated[
        bool, typer.Option("--verbose", "-v", help="Show detailed progress")
    ] = False,
) -> None:
    """Score every pair and allocate candidates to opportunities."""
    configure_logging(verbose)
    console.print(
        Panel.fit(
            "[bold blue]Smart Allocation[/bold blue] - Allocating candidates",
            border_style="blue",
        )
    )

    data = load_pool(pool)
    if verbose:
        console.print(f"[dim]Pool:[/dim] {pool}")
        console.print(f"[dim]Candidates:[/dim] {len(data.candidates)}")
        console.print(f"[dim]Opportunities:[/dim] {len(data.opportunities)}")
        console.print()

    step_labels = {
        "validate_inputs": "Validating pool",
        "build_index": "Building index",
        "score_pairs": "Scoring pairs",
        "allocate": "Allocating",
        "summarize": "Summarizing",
    }
    last_elapsed: float = 0.0

    def progress_callback(step_name: str, _description: str, elapsed: float) -> None:
        nonlocal last_elapsed
        step_time = elapsed - last_elapsed
        last_elapsed = elapsed
        label = step_labels.get(step_name, step_name)
        console.print(f"  [green]OK[/green] {label:<25} [dim][{format_time(step_time)}][/dim]")

    start_time = time.time()
    result = run_allocation(
        data.candidates,
        data.opportunities,
        seed=seed,
        progress_callback=progress_callback,
    )
    console.print(f"\n[bold]Total time:[/bold] {format_time(time.time() - start_time)}")

    if result.get("errors"):
        console.print("[red]Errors occurred:[/red]")
        for error in result["errors"]:
            console.print(f"  - {error}")
        raise typer.Exit(1)

    names = {c.id: c.name or c.id for c in data.candidates}
    roles = {o.id: o.role or o.id for o in data.opportunities}

    table = Table(title="Matches")
    table.add_column("Candidate")
    table.add_column("Opportunity")
    table.add_column("Score", justify="right")
    table.add_column("Shape", justify="right")
    table.add_column("Rule", justify="right")
    table.add_column("Lexical", justify="right")
    for match in result["matches"]:
        table.add_row(
            names.get(match.candidate_id, match.candidate_id),
            roles.get(match.opportunity_id, match.opportunity_id),
            f"{match.score:.1%}",
            f"{match.breakdown.shape:.1%}",
            f"{match.breakdown.rule_based:.1%}",
            f"{match.breakdown.lexical:.1%}",
        )
    console.print()
    console.print(table)

    metrics = result.get("metrics")
    if metrics:
        console.print(
            f"[bold]Matched:[/bold] {metrics['total_matched']}  "
            f"[bold]Rural:[/bold] {metrics['rural_representation']}  "
            f"[bold]Avg score:[/bold] {metrics['average_score']:.1%}  "
            f"[bold]Placement:[/bold] {metrics['placement_rate']:.1f}%"
        )

    if result.get("excluded_opportunities"):
        console.print(
            "[yellow]Excluded (capacity < 1):[/yellow] "
            + ", ".join(result["excluded_opportunities"])
        )

    if csv_output:
        save_csv(to_csv(result["matches"], data.candidates, data.opportunities), csv_output)
        console.print(f"\n[green]CSV saved to:[/green] {csv_output}")

    if output:
        save_markdown(format_allocation(result), output)
        console.print(f"[green]Report saved to:[/green] {output}")


@app.command()
def score(
    pool: Annotated[Path, typer.Argument(help="Path to pool JSON (candidates + opportunities)")],
    candidate_id: Annotated[str, typer.Argument(help="Candidate to explain")],
    seed: Annotated[
        int | None,
        typer.Option("--seed", "-s", help="Seed for shape scoring (default from settings)"),
    ] = None,
) -> None:
    """Explain how one candidate scores against every opportunity."""
    configure_logging()
    data = load_pool(pool)

    if not any(c.id == candidate_id for c in data.candidates):
        console.print(f"[red]Error:[/red] Unknown candidate: {candidate_id}")
        raise typer.Exit(1)

    run = match_pool(data.candidates, data.opportunities, seed=seed)
    edges = sorted(
        (e for e in run.edges if e.candidate_id == candidate_id),
        key=lambda e: (-e.score, e.opportunity_id),
    )
    assigned = next(
        (m.opportunity_id for m in run.result.matches if m.candidate_id == candidate_id),
        None,
    )

    for edge in edges:
        subtitle = "[green]assigned[/green]" if edge.opportunity_id == assigned else None
        console.print(Panel(format_edge(edge), border_style="blue", subtitle=subtitle))

    if assigned is None:
        console.print("[yellow]Candidate was not placed in this run.[/yellow]")


@app.command()
def version() -> None:
    """Show version information."""
    from smart_allocation import __version__

    console.print(f"Smart Allocation v{__version__}")


if __name__ == "__main__":
    app()
