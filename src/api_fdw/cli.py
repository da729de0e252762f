import json
from datetime import datetime
from typing import Annotated

import typer

from api_fdw.adapter import HOST_VERSION_REQUIREMENT, ApiFdw
from api_fdw.connectors.square import get_connector
from api_fdw.errors import ConfigError, FdwError
from api_fdw.http_client import HttpClient
from api_fdw.models import Column, Row, TypeTag
from api_fdw.pipeline import ScanRunner
from api_fdw.settings import AppSettings

app = typer.Typer()


@app.callback()
def main() -> None:
    """Scan a paginated REST collection as typed rows."""


def parse_column(text: str) -> Column:
    name, sep, type_name = text.partition(":")
    if not sep or not name.strip() or not type_name.strip():
        raise ConfigError(f"column must look like NAME:TYPE, got {text!r}")
    return Column(name=name.strip(), type_tag=TypeTag.parse(type_name))


def _row_json(columns: list[Column], row: Row) -> str:
    out: dict[str, object] = {}
    for column, cell in zip(columns, row.cells, strict=True):
        value = cell.value
        if isinstance(value, datetime):
            value = value.isoformat()
        out[column.name] = value
    return json.dumps(out, sort_keys=False)


def _report(msg: str) -> None:
    typer.echo(msg, err=True)


@app.command("scan")
def scan(
    object_name: Annotated[str, typer.Option("--object")],
    column: Annotated[list[str], typer.Option("--column")],
    limit: Annotated[int | None, typer.Option("--limit")] = None,
    cursor: Annotated[str | None, typer.Option("--cursor")] = None,
    missing_field: Annotated[str, typer.Option("--missing-field")] = "error",
    connector: Annotated[str, typer.Option("--connector")] = "square",
) -> None:
    settings = AppSettings()

    table_options = {"object": object_name, "on_missing_field": missing_field}
    if limit is not None:
        table_options["limit"] = str(limit)
    if cursor is not None:
        table_options["cursor"] = cursor

    try:
        columns = [parse_column(text) for text in column]
        with HttpClient(
            debug=settings.app_http_debug,
            max_attempts=settings.app_http_max_attempts,
            read_timeout=settings.app_http_read_timeout_seconds,
        ) as client:
            adapter = ApiFdw(client, connector=get_connector(connector), reporter=_report)
            adapter.init(settings.server_options())
            for row in ScanRunner(adapter).run(table_options, columns):
                typer.echo(_row_json(columns, row))
    except FdwError as exc:
        typer.echo(f"error [{exc.kind}]: {exc.message}", err=True)
        raise typer.Exit(code=1) from exc


@app.command("version")
def version() -> None:
    typer.echo(HOST_VERSION_REQUIREMENT)


if __name__ == "__main__":
    app()
