"""ChordPro and chord-sheet rendering for parsed songs.

Renders a :class:`~songbook.models.ParsedSong` back to ChordPro (``.cho``)
text, or to a plain "chords above lyrics" sheet for display.

Section type → ChordPro directive mapping
-----------------------------------------

+--------------------------------------+------------------------------------+
| Section type                         | Directive pair                     |
+======================================+====================================+
| ``VERSE``, ``CHORUS``, ``BRIDGE``    | ``{start_of_verse: label}`` /      |
|                                      | ``{end_of_verse}`` (label optional)|
+--------------------------------------+------------------------------------+
| ``INTRO``, ``OUTRO``, ``PRE_CHORUS``,| ``{comment: <heading>}``           |
| ``INTERLUDE``, ``TAG``, ``ENDING``   | (no matching ChordPro standard)    |
+--------------------------------------+------------------------------------+
| ``OTHER``                            | ``{comment: <label>}`` if labelled,|
|                                      | otherwise no wrapper directive     |
+--------------------------------------+------------------------------------+

Usage::

    from songbook.chordpro import ChordProFormatter
    formatter = ChordProFormatter()
    text = formatter.render(song)
    Path("output.cho").write_text(text)
"""

from .models import ParsedSong, SectionType, SongLine, SongSection
from .parser import CHORD_RE

# Section types whose directives ChordPro has standardised.
_STRUCTURED = {
    SectionType.VERSE: ("start_of_verse", "end_of_verse"),
    SectionType.CHORUS: ("start_of_chorus", "end_of_chorus"),
    SectionType.BRIDGE: ("start_of_bridge", "end_of_bridge"),
}


class ChordProFormatter:
    """Render a :class:`~songbook.models.ParsedSong` to text."""

    def render(self, song: ParsedSong) -> str:
        """Return ChordPro text for *song*.

        The returned string ends with a single newline and uses Unix line
        endings (``\\n``) throughout.
        """
        parts: list[str] = []

        # --- Metadata block ---
        for name, value in _metadata(song):
            parts.append(f"{{{name}: {value}}}")

        # --- Section blocks ---
        for section in song.sections:
            if parts:
                parts.append("")  # blank line before every section
            parts.extend(_render_section(section))

        return "\n".join(parts) + "\n"

    def render_chord_sheet(self, song: ParsedSong) -> str:
        """Return *song* as plain text with chords on their own row above each lyric.

        Example::

            G        G7
            Amazing grace
        """
        parts: list[str] = []

        if song.title:
            parts.append(song.title)
        if song.artist:
            parts.append(song.artist)
        details = []
        if song.key:
            details.append(f"Key: {song.key}")
        if song.capo is not None:
            details.append(f"Capo: {song.capo}")
        if details:
            parts.append("  ".join(details))

        for section in song.sections:
            if parts:
                parts.append("")
            heading = _heading(section)
            if heading:
                parts.append(f"{heading}:")
            for line in section.lines:
                if line.has_chords:
                    parts.append(chord_row(line))
                parts.append(line.text)

        return "\n".join(parts) + "\n"


# ---------------------------------------------------------------------------
# Internal helpers
# ---------------------------------------------------------------------------


def _metadata(song: ParsedSong) -> list[tuple[str, object]]:
    fields = [
        ("title", song.title),
        ("subtitle", song.subtitle),
        ("artist", song.artist),
        ("composer", song.composer),
        ("key", song.key),
        ("tempo", song.tempo),
        ("time", song.time_signature),
        ("capo", song.capo),
    ]
    return [(name, value) for name, value in fields if value is not None]


def _heading(section: SongSection) -> str:
    """Human-readable heading, e.g. "Verse 1", "Chorus" or a bare label."""
    name = section.section_type.display_name
    if name and section.label:
        return f"{name} {section.label}"
    return name or section.label or ""


def _render_section(section: SongSection) -> list[str]:
    """Return a list of lines for one section (no trailing blank line)."""
    lines = [_content_line(line) for line in section.lines]

    if section.section_type in _STRUCTURED:
        start_dir, end_dir = _STRUCTURED[section.section_type]
        if section.label:
            start_line = f"{{{start_dir}: {section.label}}}"
        else:
            start_line = f"{{{start_dir}}}"
        return [start_line, *lines, f"{{{end_dir}}}"]

    heading = _heading(section)
    if heading:
        return [f"{{comment: {heading}}}", *lines]

    # Unlabeled OTHER: content lines with no wrapper
    return lines


def _content_line(line: SongLine) -> str:
    """Render one section line.

    Chord-less text with bracketed tokens (usually from a ``{comment: ...}``
    such as ``[x2] repeat``) goes back out as a comment directive, or the
    tokens would be read as chords.  Text holding ``}`` cannot sit inside a
    directive and is written inline.
    """
    if not line.chords and CHORD_RE.search(line.text) and "}" not in line.text:
        return f"{{comment: {line.text}}}"
    return inline_chords(line)


def inline_chords(line: SongLine) -> str:
    """Re-insert ``[chord]`` tokens into *line*'s text at their positions.

    Example: text ``"Amazing grace"`` with ``G`` at 0 and ``G7`` at 8 →
    ``"[G]Amazing [G7]grace"``.
    """
    result: list[str] = []
    last = 0
    for positioned in line.chords:
        pos = min(positioned.position, len(line.text))
        result.append(line.text[last:pos])
        result.append(f"[{positioned.chord}]")
        last = max(last, pos)
    result.append(line.text[last:])
    return "".join(result)


def chord_row(line: SongLine) -> str:
    """Return the row of chord names that sits above *line*'s text.

    Each chord starts at its position; a chord that would overlap the
    previous one is pushed right, keeping one space between them.
    """
    row = ""
    for positioned in line.chords:
        name = str(positioned.chord)
        column = positioned.position
        if row and column <= len(row):
            column = len(row) + 1
        row = row.ljust(column) + name
    return row
