"""Chord transposition for ChordPro text.

Works directly on the raw text rather than on a parsed song so that all
formatting outside the ``{key: ...}`` directive and the ``[chord]`` tokens is
left byte-for-byte intact.

Spelling
--------

Sharps are used unless the song's key asks for flats:

* a key written flat (``{key: Bb}``, ``{key: Ebm}``) keeps flats;
* otherwise flats are used only if the transposed key lands on D#, G# or A#
  (written Eb, Ab, Bb);
* no key, or a key that is not a note, means sharps.

Usage::

    from songbook.transpose import transpose_content
    transpose_content("{key: C}\\n[C]Hello [G]world", 2)
    # '{key: D}\\n[D]Hello [A]world'
"""

import logging
import re

from .chord import split_root
from .note import Note

logger = logging.getLogger(__name__)

CHORD_RE = re.compile(r"\[([^\]]+)\]")

KEY_RE = re.compile(r"\{key:\s*([^}]+)\}", re.IGNORECASE)

# Transposed keys that read better with flats.
_FLAT_KEYS = frozenset({Note.D_SHARP, Note.G_SHARP, Note.A_SHARP})

# Keys offered by a key picker.
COMMON_KEYS = [
    "C", "C#", "Db", "D", "D#", "Eb", "E", "F", "F#", "Gb", "G", "G#", "Ab", "A", "A#", "Bb", "B",
    "Cm", "C#m", "Dm", "D#m", "Ebm", "Em", "Fm", "F#m", "Gm", "G#m", "Am", "A#m", "Bbm", "Bm",
]


def transpose_content(content: str, semitones: int) -> str:
    """Transpose the key directive and every chord in *content*.

    Args:
        content:   ChordPro text.
        semitones: Signed offset; any magnitude is accepted.

    Returns:
        The transposed text.  ``semitones == 0`` returns *content* unchanged.
    """
    if semitones == 0:
        return content

    use_flats = should_use_flats(content, semitones)
    logger.debug("Transposing by %d using %s", semitones, "flats" if use_flats else "sharps")

    def _key(m: re.Match) -> str:
        return f"{{key: {transpose_key(m.group(1).strip(), semitones, use_flats)}}}"

    def _chord(m: re.Match) -> str:
        return f"[{transpose_chord(m.group(1), semitones, use_flats)}]"

    content = KEY_RE.sub(_key, content, count=1)
    return CHORD_RE.sub(_chord, content)


def transpose_key(key: str, semitones: int, use_flats: bool) -> str:
    """Transpose a key such as ``G`` or ``F#m``, keeping any suffix."""
    return transpose_chord(key, semitones, use_flats)


def transpose_chord(chord: str, semitones: int, use_flats: bool) -> str:
    """Transpose the text of one chord token (without brackets).

    A slash chord has its main part and the leading note of its bass moved
    independently.  Parts whose first characters are not a note are left as
    they are.
    """
    chord = chord.strip()
    if not chord:
        return chord

    main, slash, bass = chord.rpartition("/")
    if slash:
        return (
            f"{_transpose_root(main, semitones, use_flats)}/"
            f"{_transpose_root(bass.strip(), semitones, use_flats)}"
        )

    return _transpose_root(chord, semitones, use_flats)


def should_use_flats(content: str, semitones: int) -> bool:
    """Decide the spelling for transposing *content* by *semitones*."""
    m = KEY_RE.search(content)
    if not m:
        return False

    parsed = Note.parse(m.group(1))
    if parsed is None:
        logger.debug("Key %r is not a note; using sharps", m.group(1).strip())
        return False

    note, is_flat = parsed
    if is_flat:
        return True
    return note.transpose(semitones) in _FLAT_KEYS


def semitones_between(from_key: str, to_key: str) -> int | None:
    """Return the upward distance (0-11) from *from_key* to *to_key*.

    Only the root note of each key is considered, so ``Am`` → ``C`` is 3.
    Returns None if either key is not a note.
    """
    from_parsed = Note.parse(from_key)
    to_parsed = Note.parse(to_key)
    if from_parsed is None or to_parsed is None:
        return None

    return (to_parsed[0].to_semitone() - from_parsed[0].to_semitone()) % 12


# ---------------------------------------------------------------------------
# Internal helpers
# ---------------------------------------------------------------------------


def _transpose_root(text: str, semitones: int, use_flats: bool) -> str:
    """Transpose the leading note of *text*, keeping the rest verbatim."""
    if not text:
        return text

    root, rest = split_root(text)
    parsed = Note.parse(root)
    if parsed is None:
        return text

    note, _ = parsed
    return note.transpose(semitones).spell(use_flats) + rest
