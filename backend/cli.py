"""
CLI for replaying captured model output through the LiftLens parsers.

Usage:
    python -m backend.cli parse-equipment photo1.txt photo2.txt
    python -m backend.cli parse-routine routine.txt
"""
import json
from pathlib import Path

import click

from backend.engine.parsing.equipment import aggregate_equipment, merge_equipment
from backend.engine.parsing.routine import parse_routine
from backend.errors import UpstreamContentInvalidError


def _read(path: Path) -> str:
    return path.read_text(encoding="utf-8")


@click.group()
def cli():
    """LiftLens parsing tools."""


@cli.command("parse-equipment")
@click.argument("files", nargs=-1, required=True, type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option(
    "--existing",
    "existing",
    multiple=True,
    help="Equipment already stored for the location (repeatable).",
)
def parse_equipment_command(files, existing):
    """Aggregate equipment from saved vision responses, one file per photo."""
    detected = aggregate_equipment(_read(path) for path in files)
    output = {"detectedEquipment": detected}
    if existing:
        output["merged"] = merge_equipment(list(existing), detected)
    click.echo(json.dumps(output, indent=2))


@cli.command("parse-routine")
@click.argument("file", type=click.Path(exists=True, dir_okay=False, path_type=Path))
def parse_routine_command(file):
    """Parse a saved routine response into title, description and outline."""
    try:
        record = parse_routine(_read(file))
    except UpstreamContentInvalidError as e:
        click.echo(f"✗ {e.message}", err=True)
        raise SystemExit(1)
    click.echo(json.dumps(record.to_dict(), indent=2))


@cli.command("init-db")
def init_db_command():
    """Create database tables for the configured DATABASE_URL."""
    from backend.db import models  # noqa: F401  registers tables on Base
    from backend.db.database import create_tables

    create_tables()
    click.echo("✓ Database tables created")


if __name__ == "__main__":
    cli()
