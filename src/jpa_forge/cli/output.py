from collections.abc import Callable, Sequence
from typing import Any

import typer
from rich.console import Console
from rich.table import Table

from jpa_forge.models import Response

console = Console()

RowsFn = Callable[[Any], Sequence[tuple[Any, ...]]]


def _render_table(headers: Sequence[str], rows: Sequence[tuple[Any, ...]]) -> None:
    table = Table(show_lines=False)
    for h in headers:
        table.add_column(h)
    for row in rows:
        table.add_row(*(str(v) for v in row))
    console.print(table)
    console.print(f"({len(rows)} rows)")


def file_rows(data: Any) -> list[tuple[Any, ...]]:
    return [(f["file_type"], f["file_package_name"], f["file_path"]) for f in data["files"]]


FILE_HEADERS = ("type", "package", "path")


def emit(response: Response, table: bool = False, headers: Sequence[str] = (), rows: RowsFn | None = None) -> None:
    """Print the envelope as JSON, or its payload as a table when asked and available."""
    if table and response.success and rows is not None:
        _render_table(headers, rows(response.data))
        return
    typer.echo(response.model_dump_json(indent=2))
