"""Interactive meow shell: one command at a time, blocking."""

import logging
from typing import Callable, Optional

import typer

from meow.core.engine import Engine
from meow.errors import MeowError
from meow.models import SearchResults

logger = logging.getLogger(__name__)

PROMPT = "meow> "
EXIT_WORDS = ("exit", "quit")


def render_results(results: SearchResults) -> None:
    """Print ranked results the way both the shell and `meow search` show them."""
    if not results.items:
        typer.echo("No matches.")
        return
    scores = {c.path: c.score for c in results.candidates}
    winner_path = (
        results.candidates[results.winner - 1].path if results.winner else None
    )
    typer.echo("\nTop matches:")
    for i, path in enumerate(results.items, start=1):
        score = scores.get(path)
        score_text = f"{score:.4f}" if score is not None else "  -   "
        marker = " *" if path == winner_path else ""
        typer.echo(f"[{i}] {score_text} -> {path}{marker}")
    if winner_path:
        typer.echo("(* picked by the decider among close matches)")
    if results.stale:
        typer.secho(
            f"{len(results.stale)} result(s) changed since indexing; "
            "run `index` to refresh.",
            fg=typer.colors.YELLOW,
        )


class MeowShell:
    """Read-eval loop over an Engine. Keeps the last results for `open N`."""

    def __init__(
        self,
        engine: Optional[Engine] = None,
        read_line: Callable[[str], str] = input,
    ) -> None:
        self._engine = engine or Engine()
        self._read_line = read_line
        self.last_results = SearchResults()

    def handle(self, line: str) -> bool:
        """Run one command. Returns False when the session should end."""
        text = line.strip()
        if not text:
            return True
        lowered = text.lower()

        if lowered in EXIT_WORDS:
            typer.echo("Bye, human.")
            return False
        if lowered == "clear":
            typer.clear()
            return True
        if lowered == "index":
            self._index()
            return True
        if lowered.startswith("open ") and text[5:].strip().isdigit():
            self._open_rank(int(text[5:].strip()))
            return True

        action = self._engine.interpret(text)
        if action is None:
            typer.echo("Sorry, I couldn't understand that. Is Ollama running?")
            return True
        outcome = self._engine.execute(action)
        if outcome.results is not None:
            self.last_results = outcome.results
            render_results(outcome.results)
        if outcome.opened:
            typer.echo(f"Opened {outcome.opened}")
        if outcome.message:
            typer.echo(outcome.message)
        return True

    def _index(self) -> None:
        try:
            report = self._engine.index()
        except MeowError as e:
            typer.echo(f"Indexing failed: {e}")
            return
        typer.echo(f"Indexed {report.indexed} files ({report.skipped} skipped).")

    def _open_rank(self, rank: int) -> None:
        items = self.last_results.items
        if not 1 <= rank <= len(items):
            typer.echo(f"No result at rank {rank}.")
            return
        path = items[rank - 1]
        if self._engine.open(path):
            typer.echo(f"Opened {path}")
        else:
            typer.echo(f"Could not open {path}")

    def run(self) -> None:
        typer.echo("Meow shell activated.")
        typer.echo("Type 'exit' or 'quit' to leave.\n")
        while True:
            try:
                line = self._read_line(PROMPT)
            except KeyboardInterrupt:
                typer.echo("\n(Interrupted) Bye.")
                break
            except EOFError:
                typer.echo("\n(EOF) Bye.")
                break
            if not self.handle(line):
                break


def run_shell(engine: Optional[Engine] = None) -> None:
    MeowShell(engine=engine).run()
