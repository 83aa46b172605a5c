import sys
import asyncio
from pathlib import Path
from typing import Optional

import typer
from loguru import logger
from pydantic import ValidationError
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from nhl_standings.acquisition.acquirer import Acquirer, FatalAcquisitionError
from nhl_standings.acquisition.nhl_fetcher import NHLStandingsFetcher
from nhl_standings.calculation.projector import PlayoffProjector
from nhl_standings.config.settings import AppSettings, load_settings
from nhl_standings.logging.setup import setup_logging
from nhl_standings.models.enums import PlayoffStatus
from nhl_standings.models.standings import StandingsDocument
from nhl_standings.pipeline.processor import build_document
from nhl_standings.storage.file_cache import FileCache, atomic_write_text
from nhl_standings.utils.threshold import ThresholdError, parse_threshold
from nhl_standings.validation.validator import SnapshotValidator

app = typer.Typer(
    name="nhl-standings",
    help="NHL standings build and playoff projection",
    add_completion=False,
)
console = Console()

STATUS_STYLES = {
    PlayoffStatus.CLINCHED: "bold green",
    PlayoffStatus.COMPETING: "bold yellow",
    PlayoffStatus.ELIMINATED: "bold red",
}


async def run_build(settings: AppSettings) -> StandingsDocument:
    """Acquires the snapshot and processes it into the standings document."""
    fetcher = NHLStandingsFetcher(settings)
    acquirer = Acquirer(
        settings,
        fetcher=fetcher,
        validator=SnapshotValidator(settings),
        cache=FileCache(settings.cache_dir),
    )
    try:
        acquisition = await acquirer.acquire()
    finally:
        await fetcher.close()

    if acquisition.is_stale:
        logger.warning(f"Using stale cached data (cache timestamp: {acquisition.cache_timestamp})")

    return build_document(acquisition)


@app.command()
def build(
    output: Optional[Path] = typer.Option(
        None, "--output", "-o", help="Where to write the standings document"
    ),
):
    """Fetch the standings and publish the processed document."""
    settings = load_settings()
    setup_logging(settings)
    output_path = output or settings.output_path

    logger.info("Starting NHL standings build")
    try:
        document = asyncio.run(run_build(settings))
    except FatalAcquisitionError as e:
        logger.critical(f"Build failed: {e}")
        logger.error(f"Previous document at {output_path} is left untouched.")
        raise typer.Exit(code=1)

    try:
        atomic_write_text(
            output_path, document.model_dump_json(by_alias=True, exclude_none=True, indent=2)
        )
    except OSError as e:
        logger.critical(f"Failed to write standings document to {output_path}: {e}")
        raise typer.Exit(code=1)
    logger.success(f"Standings document written to {output_path}")

    if document.is_stale_data:
        console.print(
            Panel(
                f"Standings built from cached data captured at {document.cache_timestamp}",
                title="Stale data",
                style="yellow",
            )
        )


@app.command()
def project(
    team: str = typer.Argument(..., help="Team abbreviation, e.g. TOR"),
    threshold: str = typer.Argument(..., help="Points needed to make the playoffs"),
    document_path: Optional[Path] = typer.Option(
        None, "--document", "-d", help="Standings document to read"
    ),
):
    """Project whether a team reaches a playoff points threshold."""
    settings = load_settings()
    setup_logging(settings)
    path = document_path or settings.output_path

    try:
        points_needed = parse_threshold(threshold, settings)
    except ThresholdError as e:
        console.print(f"[red]{e}[/red]")
        raise typer.Exit(code=2)

    try:
        document = StandingsDocument.model_validate_json(path.read_text(encoding="utf-8"))
    except (OSError, ValidationError) as e:
        console.print(f"[red]Could not read standings document at {path}: {e}[/red]")
        raise typer.Exit(code=2)

    selected = document.find_team(team)
    if selected is None:
        console.print(f"[red]Unknown team abbreviation: {team}[/red]")
        raise typer.Exit(code=2)

    projection = PlayoffProjector(settings).project(selected, points_needed)

    table = Table(show_header=False, box=None)
    table.add_row("Current points", str(selected.points))
    table.add_row("Games remaining", str(projection.remaining_games))
    table.add_row("Points remaining", str(projection.remaining_points))
    table.add_row("Max possible points", str(projection.max_possible_points))
    table.add_row("Points needed", str(max(0, projection.points_gap)))
    if projection.required_points_percentage is not None:
        table.add_row("Required points %", f"{projection.required_points_percentage:.1f}%")

    style = STATUS_STYLES[projection.status]
    console.print(
        Panel(
            table,
            title=f"{selected.name} vs {points_needed} points",
            subtitle=f"[{style}]{projection.status.value.upper()}[/{style}]",
        )
    )
    if document.is_stale_data:
        console.print(f"[yellow]Standings are stale (cached at {document.cache_timestamp})[/yellow]")


if __name__ == "__main__":
    try:
        app()
    except KeyboardInterrupt:
        logger.info("Execution interrupted by user (KeyboardInterrupt).")
        sys.exit(0)
