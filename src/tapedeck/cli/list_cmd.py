"""tapedeck list -- list the tapes in the configured tape directory."""

from __future__ import annotations

import typer

from tapedeck.models.config import find_project_root, load_config
from tapedeck.storage.tape_store import TapeStore


def list_tapes() -> None:
    """List tape names found under the tape directory."""
    project_root = find_project_root()
    config = load_config(project_root)
    store = TapeStore.from_config(config, project_root)

    names = store.list_tapes()
    if not names:
        typer.echo(f"No tapes found in {store.tape_dir}")
        return
    for name in names:
        typer.echo(name)
