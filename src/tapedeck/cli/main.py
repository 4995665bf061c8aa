"""tapedeck CLI entry point."""

import logging

import typer

from tapedeck import __version__
from tapedeck.cli.list_cmd import list_tapes
from tapedeck.cli.show_cmd import show
from tapedeck.cli.validate_cmd import validate

app = typer.Typer(
    name="tapedeck",
    help="Inspect and validate recorded HTTP tapes",
    no_args_is_help=True,
)

# Register subcommands
app.command(name="list")(list_tapes)
app.command()(show)
app.command()(validate)


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        typer.echo(f"tapedeck {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: bool = typer.Option(
        False,
        "--version",
        "-V",
        help="Show version and exit.",
        callback=version_callback,
        is_eager=True,
    ),
    verbose: bool = typer.Option(
        False, "--verbose", "-v", help="Log codec and storage decisions."
    ),
) -> None:
    """Inspect and validate recorded HTTP tapes."""
    if verbose:
        logging.basicConfig(
            level=logging.DEBUG,
            format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        )
