import json
import logging
import sys
from pathlib import Path

import click

from .chordpro import ChordProFormatter
from .exceptions import FetchError, KeyParseError, SongbookError
from .note import Note
from .parser import ChordProParser
from .sources import load_source
from .transpose import COMMON_KEYS, semitones_between, transpose_content


def resolve_semitones(content: str, semitones: int | None, to_key: str | None) -> int:
    """Return the offset to apply, from ``--semitones`` or ``--to``.

    Raises KeyParseError when ``--to`` is used and either the song's key or
    the target key is missing or not a note.
    """
    if to_key is None:
        return semitones or 0

    from_key = ChordProParser.extract_key(content)
    if from_key is None:
        raise KeyParseError(None)
    if Note.parse(from_key) is None:
        raise KeyParseError(from_key)
    offset = semitones_between(from_key, to_key)
    if offset is None:
        raise KeyParseError(to_key)
    return offset


def _load(location: str) -> str:
    try:
        return load_source(location)
    except FetchError as exc:
        msg = f"Error: Could not fetch {exc.url}"
        if exc.status_code:
            msg += f" (HTTP {exc.status_code})"
        click.echo(msg, err=True)
        sys.exit(1)
    except SongbookError as exc:
        click.echo(f"Error: {exc}", err=True)
        sys.exit(1)


def _emit(text: str, output_path: str | None) -> None:
    if output_path is None:
        click.echo(text, nl=not text.endswith("\n"))
        return
    dest = Path(output_path)
    dest.write_text(text, encoding="utf-8")
    click.echo(f"Written to {dest}")


@click.group()
@click.option("-v", "--verbose", is_flag=True, default=False, help="Enable debug logging.")
def main(verbose: bool) -> None:
    """Parse and transpose ChordPro songs.

    \b
    SOURCE may be a file path, an http(s) URL, or - for stdin.
    """
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )


@main.command()
@click.argument("source")
@click.option("--indent", default=2, show_default=True, help="JSON indentation.")
def parse(source: str, indent: int) -> None:
    """Print the parsed song as JSON."""
    song = ChordProParser.parse(_load(source))
    click.echo(json.dumps(song.to_dict(), indent=indent, ensure_ascii=False))


@main.command()
@click.argument("source")
@click.option("-s", "--semitones", type=int, default=None,
              help="Semitones to move (negative = down).")
@click.option("--to", "to_key", default=None, metavar="KEY",
              help="Target key; the offset is computed from the song's {key}.")
@click.option("-o", "--output", "output_path", default=None, metavar="PATH",
              help="Output file path (default: stdout).")
def transpose(source: str, semitones: int | None, to_key: str | None,
              output_path: str | None) -> None:
    """Transpose the key and every chord of a song."""
    if (semitones is None) == (to_key is None):
        click.echo("Error: give exactly one of --semitones or --to", err=True)
        sys.exit(1)

    content = _load(source)
    try:
        offset = resolve_semitones(content, semitones, to_key)
    except KeyParseError as exc:
        click.echo(f"Error: {exc}", err=True)
        sys.exit(1)

    _emit(transpose_content(content, offset), output_path)


@main.command()
@click.argument("source")
def plain(source: str) -> None:
    """Print the lyrics without chords or directives."""
    click.echo(ChordProParser.strip_chords(_load(source)))


@main.command("first-line")
@click.argument("source")
def first_line(source: str) -> None:
    """Print the first lyric line."""
    click.echo(ChordProParser.extract_first_line(_load(source)))


@main.command()
@click.argument("source")
@click.option("--sheet", is_flag=True, default=False,
              help="Render chords above lyrics instead of ChordPro.")
@click.option("-o", "--output", "output_path", default=None, metavar="PATH",
              help="Output file path (default: stdout).")
def render(source: str, sheet: bool, output_path: str | None) -> None:
    """Re-emit a song as normalised ChordPro, or as a chord sheet."""
    song = ChordProParser.parse(_load(source))
    formatter = ChordProFormatter()
    text = formatter.render_chord_sheet(song) if sheet else formatter.render(song)
    _emit(text, output_path)


@main.command()
def keys() -> None:
    """List common keys."""
    for key in COMMON_KEYS:
        click.echo(key)
