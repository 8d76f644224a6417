"""Command line interface: ``ledger-intake``."""

from __future__ import annotations

import json
import logging
import sys
from pathlib import Path

import click

from ..config import Choices, IntakeSettings, config
from ..errors import IntakeError
from ..service import IntakeService

LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR"]


def _fail(message: str) -> None:
    click.secho(f"Error: {message}", fg="red", err=True)
    sys.exit(1)


def _echo_json(payload) -> None:
    click.echo(json.dumps(payload, indent=2))


@click.group("ledger-intake")
@click.option(
    "--store",
    "store_path",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="JSON file holding imported records (overrides configured store_path).",
)
@click.option("--log-level", type=click.Choice(LOG_LEVELS, case_sensitive=False), default=None)
@click.pass_context
def cli(ctx: click.Context, store_path: Path | None, log_level: str | None) -> None:
    """Validate spreadsheet uploads and manage imported records."""
    try:
        if log_level is None:
            log_level = config(
                "log_level",
                default="WARNING",
                cast=Choices(LOG_LEVELS, cast=lambda v: str(v).upper()),
                env="LEDGER_INTAKE_LOG_LEVEL",
            )
        settings = IntakeSettings.load()
    except (IntakeError, ValueError) as e:
        _fail(f"Invalid configuration: {e}")

    logging.basicConfig(
        level=log_level.upper(),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )
    if store_path is not None:
        settings = settings.model_copy(update={"store_path": str(store_path)})
    ctx.obj = IntakeService.from_settings(settings)


def _upload(service: IntakeService, path: Path):
    try:
        return service.upload(path.read_bytes(), path.name)
    except IntakeError as e:
        _fail(str(e))


@cli.command("validate")
@click.argument("file", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option("--json", "as_json", is_flag=True, help="Print the full result as JSON.")
@click.pass_obj
def validate_cmd(service: IntakeService, file: Path, as_json: bool) -> None:
    """Validate FILE without importing it."""
    result = _upload(service, file)
    if as_json:
        _echo_json(result.to_dict())
    else:
        click.echo(result.message)
        click.echo(f"Valid rows: {len(result.valid_data)}")
        for entry in result.errors:
            for row_error in entry.errors:
                click.echo(f"  {entry.sheet} row {row_error.row}: {'; '.join(row_error.errors)}")
    if result.has_errors:
        sys.exit(1)


@cli.command("import")
@click.argument("file", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.pass_obj
def import_cmd(service: IntakeService, file: Path) -> None:
    """Validate FILE and import its valid rows."""
    result = _upload(service, file)
    for entry in result.errors:
        click.secho(f"Sheet {entry.sheet}: {len(entry.errors)} invalid rows skipped", fg="yellow")
    try:
        summary = service.import_records(result.to_dict()["validData"])
    except IntakeError as e:
        _fail(str(e))
    click.secho(summary.message, fg="green")


@cli.command("list")
@click.option("--page", type=int, default=1, show_default=True)
@click.option("--limit", type=int, default=None, help="Rows per page (default: configured page_size).")
@click.pass_obj
def list_cmd(service: IntakeService, page: int, limit: int | None) -> None:
    """Print one page of imported records as JSON."""
    try:
        result = service.list_records(page=page, limit=limit)
    except ValueError as e:
        _fail(str(e))
    _echo_json(result.to_dict())


@cli.command("delete")
@click.argument("record_id")
@click.pass_obj
def delete_cmd(service: IntakeService, record_id: str) -> None:
    """Delete the record RECORD_ID."""
    try:
        service.delete_record(record_id)
    except IntakeError as e:
        _fail(str(e))
    click.echo("Row deleted successfully")


@cli.command("export")
@click.argument("output", type=click.Path(dir_okay=False, path_type=Path))
@click.option("--format", "fmt", type=click.Choice(["xlsx", "csv"]), default="xlsx", show_default=True)
@click.pass_obj
def export_cmd(service: IntakeService, output: Path, fmt: str) -> None:
    """Export all imported records to OUTPUT."""
    if fmt == "csv":
        with output.open("w", newline="", encoding="utf-8") as fp:
            count = service.export_csv(fp)
    else:
        with output.open("wb") as fp:
            count = service.export_xlsx(fp)
    click.echo(f"Exported {count} rows to {output}")


if __name__ == "__main__":
    cli()
