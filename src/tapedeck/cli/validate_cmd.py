"""tapedeck validate CLI command for tape file validation.

Checks YAML syntax and the tape schema of each file, reporting all
errors at once with rich or CI-friendly formatting.
"""

from __future__ import annotations

from pathlib import Path
from typing import Optional

import typer

from tapedeck.loader.errors import ErrorFormatter
from tapedeck.loader.validator import validate_tape_file
from tapedeck.models.config import find_project_root, load_config


def validate(
    tapes: Optional[list[str]] = typer.Argument(
        None, help="Tape files to validate (default: all in the tape directory)"
    ),
    ci: bool = typer.Option(False, "--ci", help="CI-friendly concise output"),
) -> None:
    """Validate tape files against the tape schema.

    Exits with code 0 if all tapes are valid, 1 if any have errors.
    """
    formatter = ErrorFormatter(ci_mode=ci)

    files: list[Path] = []
    if tapes:
        for t in tapes:
            p = Path(t)
            if not p.exists():
                typer.echo(f"Error: File not found: {t}", err=True)
                raise typer.Exit(code=1)
            files.append(p)
    else:
        project_root = find_project_root()
        config = load_config(project_root)
        tape_dir = project_root / config.tape_dir
        if tape_dir.is_dir():
            files = sorted(tape_dir.rglob(f"*.{config.extension}"))
        if not files:
            typer.echo("No tape files found. Specify files or record some tapes first.")
            raise typer.Exit(code=1)

    valid_count = 0
    for filepath in files:
        _, errors = validate_tape_file(filepath)
        if errors:
            # Undecodable bytes are already reported; keep the snippet printable
            source = filepath.read_text(encoding="utf-8", errors="replace")
            typer.echo(formatter.format_all(errors, source, str(filepath)), err=not ci)
        else:
            valid_count += 1
            typer.echo(f"  {filepath} ... valid")

    typer.echo(f"\n{valid_count}/{len(files)} tapes valid")

    if valid_count < len(files):
        raise typer.Exit(code=1)
