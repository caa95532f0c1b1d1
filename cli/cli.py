"""CLI for the trip itinerary planner.

Developer commands to prepare a local database, preview the itinerary a
destination's catalog would produce, and run the API server.
"""

import json
from pathlib import Path

import typer
import uvicorn
from loguru import logger
from rich.console import Console
from rich.table import Table

from app.catalog.repository import list_activities_for_destination, upsert_activity
from app.catalog.seed_data import DEMO_ACTIVITIES
from app.config.settings import settings
from app.core.logger import setup_logger
from app.db.models import Base
from app.db.session import get_engine, get_session
from app.trips.service import plan_for_destination
from scripts.migrate_add_trip_regen_lock import migrate_add_trip_regen_lock

console = Console()

app = typer.Typer(
    name="trip-planner",
    help="Trip itinerary planner - local database and preview tools",
    add_completion=False,
)

DEFAULT_HOST = "127.0.0.1"


@app.callback()
def main() -> None:
    """Configure logging before any command runs."""
    setup_logger(level=settings.log_level, log_file=settings.log_file, serialize=settings.log_json)


def _load_catalog_file(path: Path) -> list[dict]:
    """Read a JSON list of activity objects."""
    data = json.loads(path.read_text(encoding="utf-8"))
    if not isinstance(data, list):
        raise typer.BadParameter(f"{path} must contain a JSON list of activities")
    return data


@app.command()
def migrate() -> None:
    """Create missing tables and apply column migrations."""
    Base.metadata.create_all(bind=get_engine())
    migrate_add_trip_regen_lock()
    console.print("[green]Database schema is up to date.[/green]")


@app.command()
def seed(
    file: Path | None = typer.Option(None, "--file", "-f", help="JSON file with activities (defaults to the demo catalog)"),
) -> None:
    """Upsert catalog activities keyed by (destination, name)."""
    activities = _load_catalog_file(file) if file else DEMO_ACTIVITIES
    Base.metadata.create_all(bind=get_engine())

    created = 0
    updated = 0
    with get_session() as session:
        for data in activities:
            _, was_created = upsert_activity(session, data)
            if was_created:
                created += 1
            else:
                updated += 1

    logger.info("Activity seed completed", created=created, updated=updated)
    console.print(f"[green]Activity seed completed:[/green] {created} created, {updated} updated")


@app.command()
def preview(
    destination: str = typer.Option(..., "--destination", "-d", help="Catalog destination"),
    days: int = typer.Option(3, "--days", "-n", min=1, help="Number of trip days"),
    interests: str = typer.Option("", "--interests", "-i", help="Comma-separated interests"),
) -> None:
    """Print the itinerary the allocator would build, without saving anything."""
    with get_session() as session:
        activities = list_activities_for_destination(session, destination)
        plan = plan_for_destination(activities, days, interests)

        table = Table(title=f"{destination} - {days} day(s)")
        table.add_column("Day", justify="right")
        table.add_column("#", justify="right")
        table.add_column("Activity")
        table.add_column("Category")
        table.add_column("Hours", justify="right")
        table.add_column("Price", justify="right")

        for day_number, day in enumerate(plan.days, start=1):
            if not day:
                table.add_row(str(day_number), "-", "[dim](free day)[/dim]", "", "", "")
            for order_index, activity in enumerate(day, start=1):
                table.add_row(
                    str(day_number),
                    str(order_index),
                    activity.name,
                    activity.category,
                    f"{activity.duration_hours:g}",
                    "$" * activity.price_level,
                )

    console.print(table)
    if plan.warning:
        console.print(f"[yellow]Warning:[/yellow] {plan.warning}")


@app.command()
def server(
    host: str = typer.Option(DEFAULT_HOST, "--host", "-h", help="Host to bind to"),
    port: int = typer.Option(8000, "--port", "-p", help="Port to bind to"),
    reload: bool = typer.Option(False, "--reload", help="Enable auto-reload"),
) -> None:
    """Run the FastAPI server."""
    logger.info(f"Starting FastAPI server on {host}:{port} (reload={reload})")
    uvicorn.run("app.main:app", host=host, port=port, reload=reload)


if __name__ == "__main__":
    app()
