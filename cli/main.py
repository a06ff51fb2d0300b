"""Catechism CLI — look up and read paragraphs of the Catechism.

Usage:
    catechism 484          print paragraph 484
    catechism              print every paragraph, one per line
    catechism begin [N]    start reading at paragraph N (default: the first)
    catechism next         advance the reading position and print it

The first run crawls the archive into ./cache; later runs read from disk.
"""

from __future__ import annotations

import sys
from pathlib import Path

# Ensure the project root is on sys.path so that `from catechism.xxx import ...`
# works when the CLI is invoked as `python cli/main.py` from any directory.
_ROOT = Path(__file__).resolve().parent.parent
if str(_ROOT) not in sys.path:
    sys.path.insert(0, str(_ROOT))

import logging
from typing import Optional

import click
import typer
from typer.core import TyperGroup

from catechism.config import settings
from catechism.errors import CatechismError
from catechism.index import CatechismIndex
from catechism.models import Paragraph
from catechism.scraper.cache import CacheStore
from catechism.scraper.walker import build_index
from cli.context import ReadingPosition, load_position, save_position


class _ShorthandGroup(TyperGroup):
    """Route ``catechism N`` to ``lookup N`` and bare ``catechism`` to ``show``."""

    def parse_args(self, ctx: click.Context, args: list[str]) -> list[str]:
        args = list(args)
        positional = next((i for i, a in enumerate(args) if not a.startswith("-")), None)
        if positional is None:
            args.append("show")
        elif args[positional].isdigit():
            args.insert(positional, "lookup")
        return super().parse_args(ctx, args)


app = typer.Typer(
    name="catechism",
    help="Read the Catechism of the Catholic Church from the command line.",
    cls=_ShorthandGroup,
)


def _setup_logging(verbose: bool) -> None:
    level = logging.DEBUG if verbose else logging.WARNING
    logging.basicConfig(level=level, format="[%(levelname)s] %(message)s")


def _one_line(text: str) -> str:
    return text.replace("\r\n", " ").replace("\n", " ")


def _fail(message: str) -> None:
    typer.echo(f"❌ {message}", err=True)
    raise typer.Exit(code=1)


def _load_index() -> CatechismIndex:
    """Crawl (or re-read from cache) the whole Catechism."""
    try:
        return build_index(settings)
    except CatechismError as exc:
        _fail(str(exc))


def _show_at(index: CatechismIndex, number: int) -> Paragraph:
    paragraph = index.lookup(number)
    if paragraph is None:
        _fail(f"Paragraph {number} not found.")
    save_position(ReadingPosition(paragraph=number))
    typer.echo(_one_line(paragraph.text))
    return paragraph


@app.callback()
def main(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Verbose logging."),
) -> None:
    """Read the Catechism of the Catholic Church from the command line."""
    _setup_logging(verbose)


# ---------------------------------------------------------------------------
# Lookup commands
# ---------------------------------------------------------------------------
@app.command("lookup")
def lookup(
    number: int = typer.Argument(..., help="Paragraph number, e.g. 484."),
) -> None:
    """Print one paragraph on a single line (empty if it does not exist)."""
    paragraph = _load_index().lookup(number)
    typer.echo(_one_line(paragraph.text) if paragraph else "")


@app.command("show")
def show() -> None:
    """Print every paragraph, one per line."""
    for paragraph in _load_index().all_paragraphs():
        typer.echo(_one_line(paragraph.text))


# ---------------------------------------------------------------------------
# Reading position
# ---------------------------------------------------------------------------
@app.command("begin")
def begin(
    number: Optional[int] = typer.Argument(None, help="Paragraph to start at."),
) -> None:
    """Set the reading position and print that paragraph."""
    index = _load_index()
    if number is None:
        numbers = index.numbers()
        if not numbers:
            _fail("No paragraphs found.")
        number = numbers[0]
    _show_at(index, number)


@app.command("next")
def next_paragraph() -> None:
    """Advance the reading position to the next paragraph and print it."""
    index = _load_index()
    position = load_position()

    if position.paragraph is None:
        numbers = index.numbers()
        if not numbers:
            _fail("No paragraphs found.")
        target = numbers[0]
    else:
        target = index.next_number(position.paragraph)
        if target is None:
            _fail(f"End of the Catechism reached (last read: {position.paragraph}).")
    _show_at(index, target)


@app.command("where")
def where() -> None:
    """Print the saved reading position."""
    position = load_position()
    if position.paragraph is None:
        typer.echo("No reading position saved. Run 'begin' first.")
        return
    typer.echo(f"Paragraph {position.paragraph}")


# ---------------------------------------------------------------------------
# Cache
# ---------------------------------------------------------------------------
@app.command("cache-info")
def cache_info() -> None:
    """Show where pages are cached and how many there are."""
    with CacheStore(settings.cache_dir) as store:
        pages = store.cached_pages()
    typer.echo(f"Cache directory : {settings.cache_dir.resolve()}")
    typer.echo(f"Cached pages    : {len(pages)}")


# ---------------------------------------------------------------------------
# Entry-point
# ---------------------------------------------------------------------------
if __name__ == "__main__":
    app()
