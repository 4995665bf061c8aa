"""tapedeck show -- render the interactions stored in a tape.

Loads the tape through the same path a replaying proxy would, so any
body that fails to decode is reported here too.
"""

from __future__ import annotations

import typer
from rich import box
from rich.console import Console
from rich.table import Table

from tapedeck.codec.body import encode_body
from tapedeck.errors import TapeError, TapeNotFound
from tapedeck.models.config import find_project_root, load_config
from tapedeck.models.tape import Headers
from tapedeck.storage.tape_store import TapeStore


def _body_summary(body: bytes, headers: Headers) -> str:
    """Size plus the storage form the body codec picks for it."""
    persisted = encode_body(body, headers)
    form = persisted.encoding
    if persisted.compression:
        form = f"{form}+{persisted.compression}"
    return f"{len(body)} B ({form})"


def show(
    name: str = typer.Argument(..., help="Tape name, relative to the tape directory"),
) -> None:
    """Show the recorded interactions of a tape."""
    console = Console()

    project_root = find_project_root()
    config = load_config(project_root)
    store = TapeStore.from_config(config, project_root)

    try:
        records = store.load(name)
    except TapeNotFound as exc:
        console.print(f"[bold red]Error:[/bold red] {exc}")
        raise typer.Exit(code=1)
    except TapeError as exc:
        console.print(f"[bold red]Error:[/bold red] Could not load tape '{name}': {exc}")
        raise typer.Exit(code=1)

    table = Table(box=box.SIMPLE, title=f"{name} ({len(records)} interactions)")
    table.add_column("#", justify="right")
    table.add_column("Method", style="bold")
    table.add_column("Path")
    table.add_column("Status", justify="right")
    table.add_column("Request body")
    table.add_column("Response body")

    for index, record in enumerate(records, 1):
        status = record.response.status
        status_style = "green" if status < 400 else "red"
        table.add_row(
            str(index),
            record.request.method,
            record.request.path,
            f"[{status_style}]{status}[/{status_style}]",
            _body_summary(record.request.body, record.request.headers),
            _body_summary(record.response.body, record.response.headers),
        )

    console.print(table)
