"""Output formatting utilities for the CLI."""

from __future__ import annotations

import io
from contextlib import contextmanager
from dataclasses import dataclass
from datetime import datetime
from typing import Any, Iterable, Mapping

from rich.console import Console
from rich.markup import escape
from rich.table import Table
from rich.text import Text
from rich.theme import Theme

from runops.core.kinds import ResourceKind
from runops.core.resources import (
    ListedRow,
    ResourceRecord,
    evaluate_status,
    format_age,
    lookup_path,
)

_THEME = Theme(
    {
        "ok": "bold green",
        "warn": "yellow",
        "err": "bold red",
        "title": "bold cyan",
        "meta": "dim",
    }
)

# Wide enough that list tables never wrap when captured to text.
_RENDER_WIDTH = 512

console = Console(theme=_THEME)
err_console = Console(theme=_THEME, stderr=True)


def render_table(
    rows: Iterable[ListedRow],
    kind: ResourceKind,
    *,
    no_headers: bool = False,
    all_namespaces: bool = False,
) -> str:
    """
    Render listed rows as column-aligned plain text.

    Columns are NAME, NAMESPACE (all-namespaces mode only), URL, AGE and
    CONDITIONS. Rows are emitted in the order given. An empty input always
    yields the single ``No <Kind>s found`` line, with or without headers.
    """
    rows = list(rows)
    if not rows:
        return f"No {kind.display_plural} found"

    t = Table(
        box=None,
        show_header=not no_headers,
        show_edge=False,
        pad_edge=False,
        padding=(0, 1),
        header_style="",
    )
    columns = ["NAME", "URL", "AGE", "CONDITIONS"]
    if all_namespaces:
        columns.insert(1, "NAMESPACE")
    for column in columns:
        t.add_column(column, no_wrap=True)

    for row in rows:
        cells = [row.name, row.url, row.age, row.status]
        if all_namespaces:
            cells.insert(1, row.namespace)
        t.add_row(*(Text(cell) for cell in cells))

    buffer = io.StringIO()
    Console(
        file=buffer,
        width=_RENDER_WIDTH,
        color_system=None,
        highlight=False,
    ).print(t)
    return "\n".join(line.rstrip() for line in buffer.getvalue().splitlines())


@dataclass(frozen=True)
class Out:
    """Output formatter for CLI messages, tables and descriptions."""

    def info(self, msg: str) -> None:
        """Print an info message."""
        console.print(f"[title]›[/] {escape(msg)}")

    @contextmanager
    def status(self, msg: str):
        """Show a transient status spinner while work is in progress."""
        with err_console.status(msg, spinner="dots"):
            yield

    def error(self, msg: str) -> None:
        """Print an error message."""
        err_console.print(f"[err]✗[/] {escape(msg)}")

    def header(self, title: str) -> None:
        """Print a header message."""
        console.print(f"[title]{escape(title)}[/]")

    def kv(self, items: Mapping[str, Any]) -> None:
        """Print key-value pairs."""
        for k, v in items.items():
            console.print(f"[meta]{escape(k)}[/]: {escape(str(v))}")

    def conditions_table(self, record: ResourceRecord, title: str = "Conditions") -> None:
        """
        Expects a ResourceRecord; renders its conditions in backend order.
        """
        t = Table(title=title, show_lines=False)
        t.add_column("Type", style="meta", no_wrap=True)
        t.add_column("Status", no_wrap=True)
        t.add_column("Reason")
        t.add_column("Message")

        for c in record.conditions:
            style = {"True": "ok", "False": "err"}.get(c.status, "warn")
            t.add_row(
                Text(c.type),
                Text(c.status, style=style),
                Text(c.reason),
                Text(c.message),
            )

        console.print(t)

    def description(self, kind: ResourceKind, record: ResourceRecord, now: datetime) -> None:
        """Render a human-readable description of one resource."""
        self.header(f"{kind.kind} {record.name}")

        items: dict[str, Any] = {
            "Name": record.name,
            "Namespace": record.namespace,
        }
        if record.address:
            items["URL"] = record.address
        items["Age"] = format_age(record.created_at, now)
        items["Status"] = evaluate_status(record.conditions) or "---"

        for label, path in kind.detail_fields:
            value = lookup_path(record.raw, path)
            if value not in (None, ""):
                items[label] = value

        if record.labels:
            items["Labels"] = ", ".join(f"{k}={v}" for k, v in record.labels.items())

        self.kv(items)

        if record.conditions:
            self.conditions_table(record)
        else:
            console.print("[meta]No conditions reported[/]")


out = Out()
