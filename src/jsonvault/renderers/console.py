"""Rich-based console rendering of collections and listings."""

from __future__ import annotations

import json
from io import StringIO

from rich.console import Console
from rich.table import Table
from rich.text import Text

_MAX_VALUE_LEN = 60


def render_collection(name: str, records: list[object]) -> str:
    """Render records as a table, one column per field seen in any record."""
    columns: list[str] = []
    for record in records:
        if isinstance(record, dict):
            columns.extend(key for key in record if key not in columns)

    table = Table()
    table.add_column("#", justify="right")
    if not columns:
        table.add_column("value")
    for column in columns:
        table.add_column(column)

    for index, record in enumerate(records):
        if isinstance(record, dict):
            cells = [_format_value(record[key]) if key in record else "" for key in columns]
        else:
            cells = [_format_value(record)] + [""] * max(len(columns) - 1, 0)
        table.add_row(str(index), *cells)

    return _export(f"{name} ({len(records)} records)", table)


def render_names(title: str, names: list[str]) -> str:
    table = Table()
    table.add_column("name")
    for name in names:
        table.add_row(name)
    return _export(title, table)


def _export(heading: str, table: Table) -> str:
    console = Console(record=True, width=120, markup=False, file=StringIO())
    console.print(Text(heading, no_wrap=True))
    console.print(table)
    return console.export_text()


def _format_value(value: object) -> str:
    """Format a cell value, truncating long ones."""
    s = value if isinstance(value, str) else json.dumps(value, ensure_ascii=False)
    if len(s) <= _MAX_VALUE_LEN:
        return s
    return s[:_MAX_VALUE_LEN] + "..."
