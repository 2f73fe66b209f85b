"""[Layer: Presentation] Typer CLI Commands."""

from importlib.metadata import PackageNotFoundError, version as get_package_version
from pathlib import Path
from typing import Optional

import typer

from meow.core.engine import Engine
from meow.core.scope import find_by_name
from meow.errors import MeowError
from meow.models import AiAction
from meow.shell import render_results, run_shell


def _get_version() -> str:
    """Get version from package metadata (single source of truth: pyproject.toml)."""
    try:
        return get_package_version("meow-shell")
    except PackageNotFoundError:
        return "0.0.0-dev"


def _version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        typer.echo(f"meow {_get_version()}")
        raise typer.Exit()


app = typer.Typer(
    name="meow",
    help="A curious cat that explores your filesystem.",
)


@app.callback(invoke_without_command=True)
def main(
    ctx: typer.Context,
    version: bool = typer.Option(
        False,
        "--version",
        "-V",
        callback=_version_callback,
        is_eager=True,
        help="Show version and exit.",
    ),
) -> None:
    """Start the interactive shell when no command is provided."""
    if ctx.invoked_subcommand is None:
        run_shell()


@app.command()
def shell() -> None:
    """Start the interactive meow shell."""
    run_shell()


@app.command()
def hello(name: str = typer.Argument("human", help="Who to greet.")) -> None:
    """Print a one-off greeting (handy to check the install)."""
    typer.echo(f"Meow, {name}!")


app.command("hi", hidden=True)(hello)


@app.command()
def index(
    root: Optional[list[Path]] = typer.Option(
        None,
        "--root",
        "-r",
        help="Directory to index (repeatable). Defaults to MEOW_INDEX_ROOTS.",
    ),
) -> None:
    """Embed every file under the index roots into the vector store."""
    engine = Engine()

    def _progress(path: Path, ok: bool) -> None:
        if not ok:
            typer.secho(f"Skipped {path}", fg=typer.colors.YELLOW, err=True)

    try:
        report = engine.index(roots=root or None, on_progress=_progress)
    except MeowError as e:
        typer.secho(f"Indexing failed: {e}", fg=typer.colors.RED, err=True)
        raise typer.Exit(1)
    typer.echo(
        f"Indexed {report.indexed} of {report.total} files ({report.skipped} skipped)."
    )


@app.command()
def search(
    query: str = typer.Argument(..., help="What you are looking for."),
    folder: Optional[str] = typer.Option(
        None, "--folder", "-f", help="downloads, pictures, documents or desktop."
    ),
    time: Optional[str] = typer.Option(
        None, "--time", "-t", help="Only files modified today or yesterday."
    ),
    file_type: Optional[str] = typer.Option(None, "--type", help="File type hint."),
) -> None:
    """Semantic search over indexed files."""
    action = AiAction(
        intent="search",
        query=query,
        file_type=file_type,
        time_filter=time,
        folder_hint=folder,
    )
    outcome = Engine().execute(action)
    if outcome.results is not None:
        render_results(outcome.results)
    if outcome.message:
        typer.echo(outcome.message)
        if outcome.results is None:
            raise typer.Exit(1)


@app.command()
def find(
    text: str = typer.Argument(..., help="Text contained in the file or folder name."),
    root: Path = typer.Option(Path("."), "--root", "-r", help="Where to look."),
) -> None:
    """Literal, case-insensitive name search (no embeddings)."""
    matches = find_by_name(root, text)
    if not matches:
        typer.echo("No matches.")
        return
    for path in matches:
        typer.echo(str(path))


@app.command()
def prune(
    yes: bool = typer.Option(False, "--yes", "-y", help="Skip confirmation."),
) -> None:
    """Remove index records whose files no longer exist."""
    if not yes:
        typer.confirm("Delete records for missing files?", abort=True)
    try:
        removed = Engine().prune()
    except MeowError as e:
        typer.secho(f"Prune failed: {e}", fg=typer.colors.RED, err=True)
        raise typer.Exit(1)
    typer.echo(f"Removed {len(removed)} stale record(s).")
