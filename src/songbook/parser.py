"""ChordPro parser.

Turns ChordPro text into a :class:`~songbook.models.ParsedSong`.  Format
reference: https://www.chordpro.org/chordpro/

Line handling (each line is stripped first, rules tried in order)
-----------------------------------------------------------------

1. Blank line: kept as an empty :class:`SongLine` inside an open section,
   ignored otherwise.
2. ``{start_of_X[: label]}`` / ``{so X[: label]}``: closes the open section
   and opens a new one.
3. ``{end_of_X}`` / ``{eo X}``: closes the open section.  The keyword does
   not have to match the one the section was opened with.
4. ``{name[: value]}``: metadata directive, see :class:`Directive`.
   ``{c: ...}`` / ``{comment: ...}`` adds a chord-less line to the open
   section.  Unknown directives are ignored.
5. Anything else is a lyric line with inline ``[chord]`` tokens.  Content
   outside any section opens an unlabeled verse.

Sections without lines are never emitted.  Parsing never raises: unknown
directives, bad numbers and unparseable chords are dropped silently (logged
at DEBUG level).

Usage::

    from songbook.parser import ChordProParser
    song = ChordProParser.parse(Path("amazing-grace.cho").read_text())
"""

import logging
import re
from enum import Enum

from .chord import Chord, PositionedChord
from .models import ParsedSong, SectionType, SongLine, SongSection

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Regexes
# ---------------------------------------------------------------------------

# {name} or {name: value}
DIRECTIVE_RE = re.compile(r"\{(\w+)(?::\s*([^}]*))?\}")

# [Am7]; the first ] closes, no nesting
CHORD_RE = re.compile(r"\[([^\]]+)\]")

_SECTION_KEYWORDS = r"(verse|chorus|bridge|tab|grid|abc|ly|textblock)"

SECTION_START_RE = re.compile(
    r"\{(?:start_of_|so\s*)" + _SECTION_KEYWORDS + r"(?::\s*([^}]*))?\}",
    re.IGNORECASE,
)

SECTION_END_RE = re.compile(
    r"\{(?:end_of_|eo\s*)" + _SECTION_KEYWORDS + r"\}",
    re.IGNORECASE,
)

_INT_RE = re.compile(r"[+-]?[0-9]+")

# tempo and capo are 32-bit signed values
_INT_MIN, _INT_MAX = -(2**31), 2**31 - 1


# ---------------------------------------------------------------------------
# Directive
# ---------------------------------------------------------------------------


class Directive(Enum):
    TITLE = "title"
    SUBTITLE = "subtitle"
    ARTIST = "artist"
    COMPOSER = "composer"
    KEY = "key"
    TEMPO = "tempo"
    TIME = "time"
    CAPO = "capo"
    COMMENT = "comment"

    @classmethod
    def from_name(cls, name: str) -> "Directive | None":
        """Return the directive for *name* (case-insensitive), or None if unknown."""
        return _DIRECTIVE_ALIASES.get(name.lower())


_DIRECTIVE_ALIASES = {
    "title": Directive.TITLE,
    "t": Directive.TITLE,
    "subtitle": Directive.SUBTITLE,
    "st": Directive.SUBTITLE,
    "artist": Directive.ARTIST,
    "a": Directive.ARTIST,
    "composer": Directive.COMPOSER,
    "key": Directive.KEY,
    "tempo": Directive.TEMPO,
    "time": Directive.TIME,
    "capo": Directive.CAPO,
    "c": Directive.COMMENT,
    "comment": Directive.COMMENT,
}


def _directive_value(match: re.Match) -> str | None:
    value = match.group(2)
    return value.strip() if value is not None else None


def _parse_int(value: str | None) -> int | None:
    if value is None or not _INT_RE.fullmatch(value):
        return None
    number = int(value)
    if not _INT_MIN <= number <= _INT_MAX:
        return None
    return number


def _lines(content: str) -> list[str]:
    """Split *content* on ``\\n`` only; a final newline does not start a new line.

    Form feeds, NEL and the other separators ``str.splitlines`` honours stay
    inside their line.  A trailing ``\\r`` is removed by the caller's strip().
    """
    lines = content.split("\n")
    if lines[-1] == "":
        lines.pop()
    return lines


def _is_directive_line(line: str) -> bool:
    return line.startswith("{") and line.endswith("}")


# ---------------------------------------------------------------------------
# Parser
# ---------------------------------------------------------------------------


class ChordProParser:
    """Parse ChordPro text into structured data.

    All methods are static; the class only groups the parser with its
    text-extraction helpers, which must agree with :meth:`parse` on what
    counts as a directive and a chord token.
    """

    @staticmethod
    def parse(content: str) -> ParsedSong:
        """Parse *content* into a :class:`ParsedSong`."""
        song = ParsedSong()
        current: SongSection | None = None

        for line in _lines(content):
            current = _consume_line(song, current, line.strip())

        _flush(song, current)
        return song

    @staticmethod
    def parse_line(line: str) -> SongLine:
        """Split a lyric line into plain text and positioned chords.

        Tokens that are not chords (``[x]``, ``[*]``) are removed from the text
        without producing a chord entry.
        """
        text_parts: list[str] = []
        length = 0
        chords: list[PositionedChord] = []
        last_end = 0

        for m in CHORD_RE.finditer(line):
            segment = line[last_end:m.start()]
            text_parts.append(segment)
            length += len(segment)

            chord = Chord.parse(m.group(1))
            if chord is not None:
                chords.append(PositionedChord(position=length, chord=chord))
            else:
                logger.debug("Dropping unparseable chord token %r", m.group(0))

            last_end = m.end()

        text_parts.append(line[last_end:])
        return SongLine(text="".join(text_parts), chords=chords)

    @staticmethod
    def strip_chords(content: str) -> str:
        """Return the lyrics of *content* as plain text.

        Directive lines are dropped, except comments whose value is kept as a
        line of text.  Empty lines are dropped.
        """
        result: list[str] = []

        for line in _lines(content):
            trimmed = line.strip()

            if _is_directive_line(trimmed):
                m = DIRECTIVE_RE.search(trimmed)
                if m and Directive.from_name(m.group(1)) is Directive.COMMENT:
                    value = _directive_value(m)
                    if value:
                        result.append(value)
                continue

            plain = CHORD_RE.sub("", trimmed).strip()
            if plain:
                result.append(plain)

        return "\n".join(result).strip()

    @staticmethod
    def extract_first_line(content: str) -> str:
        """Return the first lyric line without chords, or ``""`` if there is none."""
        for line in _lines(content):
            trimmed = line.strip()
            if not trimmed or _is_directive_line(trimmed):
                continue

            plain = CHORD_RE.sub("", trimmed).strip()
            if plain:
                return plain

        return ""

    @staticmethod
    def extract_title(content: str) -> str | None:
        return _extract_directive(content, Directive.TITLE)

    @staticmethod
    def extract_key(content: str) -> str | None:
        return _extract_directive(content, Directive.KEY)


def parse_song(content: str) -> ParsedSong:
    """Shortcut for :meth:`ChordProParser.parse`."""
    return ChordProParser.parse(content)


# ---------------------------------------------------------------------------
# Internal helpers
# ---------------------------------------------------------------------------


def _flush(song: ParsedSong, section: SongSection | None) -> None:
    """Append *section* to *song* unless it is missing or empty."""
    if section is not None and section.lines:
        song.sections.append(section)


def _consume_line(
    song: ParsedSong, current: SongSection | None, line: str
) -> SongSection | None:
    """Apply one stripped line to *song* and return the new open section."""
    if not line:
        if current is not None:
            current.lines.append(SongLine())
        return current

    m = SECTION_START_RE.search(line)
    if m:
        _flush(song, current)
        label = m.group(2).strip() if m.group(2) is not None else None
        return SongSection(section_type=SectionType.from_keyword(m.group(1)), label=label)

    if SECTION_END_RE.search(line):
        _flush(song, current)
        return None

    m = DIRECTIVE_RE.search(line)
    if m:
        _apply_directive(song, current, m)
        return current

    song_line = ChordProParser.parse_line(line)
    if current is not None:
        current.lines.append(song_line)
        return current
    if song_line.text or song_line.chords:
        return SongSection(section_type=SectionType.VERSE, lines=[song_line])
    return None


def _apply_directive(song: ParsedSong, current: SongSection | None, m: re.Match) -> None:
    directive = Directive.from_name(m.group(1))
    value = _directive_value(m)

    if directive is None:
        logger.debug("Ignoring unknown directive %r", m.group(1))
    elif directive is Directive.TITLE:
        song.title = value
    elif directive is Directive.SUBTITLE:
        song.subtitle = value
    elif directive is Directive.ARTIST:
        song.artist = value
    elif directive is Directive.COMPOSER:
        song.composer = value
    elif directive is Directive.KEY:
        song.key = value
    elif directive is Directive.TEMPO:
        song.tempo = _parse_int(value)
        if song.tempo is None:
            logger.debug("Ignoring non-numeric tempo %r", value)
    elif directive is Directive.TIME:
        song.time_signature = value
    elif directive is Directive.CAPO:
        song.capo = _parse_int(value)
        if song.capo is None:
            logger.debug("Ignoring non-numeric capo %r", value)
    elif directive is Directive.COMMENT:
        if current is not None and value is not None:
            current.lines.append(SongLine(text=value))


def _extract_directive(content: str, wanted: Directive) -> str | None:
    """Return the value of the first directive line naming *wanted*."""
    for line in _lines(content):
        m = DIRECTIVE_RE.search(line.strip())
        if m and Directive.from_name(m.group(1)) is wanted:
            return _directive_value(m)
    return None
