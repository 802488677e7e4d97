"""Pitch-class model used by chord parsing and transposition.

A :class:`Note` is one of the twelve pitch classes.  Spelling (sharp vs flat)
is not part of the value; it is chosen at render time with
:meth:`Note.to_sharp_string` / :meth:`Note.to_flat_string`.

``H`` is accepted as a historical alias for ``B`` (German / Slavic
notation) and always resolves to a natural ``B``.
"""

from enum import Enum


class Note(Enum):
    C = 0
    C_SHARP = 1
    D = 2
    D_SHARP = 3
    E = 4
    F = 5
    F_SHARP = 6
    G = 7
    G_SHARP = 8
    A = 9
    A_SHARP = 10
    B = 11

    @classmethod
    def parse(cls, text: str) -> tuple["Note", bool] | None:
        """Parse a note name such as ``C``, ``c#``, ``Db`` or ``H``.

        Only the first one or two characters are inspected, so ``"Am7"``
        parses as ``A``.  Returns ``(note, is_flat)`` or ``None`` when the
        first letter is not A–H.
        """
        text = text.strip()
        if not text:
            return None

        base = text[0].upper()
        modifier = text[1] if len(text) > 1 else None

        if base == "H":
            return cls.B, False
        if base not in _NATURALS:
            return None

        if modifier == "#":
            return _SHARPS[base], False
        if modifier == "b":
            return _FLATS[base], True
        return _NATURALS[base], False

    @classmethod
    def from_semitone(cls, semitone: int) -> "Note":
        return cls(semitone % 12)

    def to_semitone(self) -> int:
        return self.value

    def transpose(self, semitones: int) -> "Note":
        # Python's % is already non-negative for a positive modulus
        return Note.from_semitone(self.value + semitones)

    def to_sharp_string(self) -> str:
        return _SHARP_NAMES[self]

    def to_flat_string(self) -> str:
        return _FLAT_NAMES[self]

    def spell(self, use_flats: bool) -> str:
        return self.to_flat_string() if use_flats else self.to_sharp_string()


_NATURALS = {
    "C": Note.C,
    "D": Note.D,
    "E": Note.E,
    "F": Note.F,
    "G": Note.G,
    "A": Note.A,
    "B": Note.B,
}

# Enharmonic tables: E# and B# wrap forward, Cb and Fb wrap back.
_SHARPS = {
    "C": Note.C_SHARP,
    "D": Note.D_SHARP,
    "E": Note.F,
    "F": Note.F_SHARP,
    "G": Note.G_SHARP,
    "A": Note.A_SHARP,
    "B": Note.C,
}

_FLATS = {
    "C": Note.B,
    "D": Note.C_SHARP,
    "E": Note.D_SHARP,
    "F": Note.E,
    "G": Note.F_SHARP,
    "A": Note.G_SHARP,
    "B": Note.A_SHARP,
}

_SHARP_NAMES = {
    Note.C: "C",
    Note.C_SHARP: "C#",
    Note.D: "D",
    Note.D_SHARP: "D#",
    Note.E: "E",
    Note.F: "F",
    Note.F_SHARP: "F#",
    Note.G: "G",
    Note.G_SHARP: "G#",
    Note.A: "A",
    Note.A_SHARP: "A#",
    Note.B: "B",
}

_FLAT_NAMES = {
    Note.C: "C",
    Note.C_SHARP: "Db",
    Note.D: "D",
    Note.D_SHARP: "Eb",
    Note.E: "E",
    Note.F: "F",
    Note.F_SHARP: "Gb",
    Note.G: "G",
    Note.G_SHARP: "Ab",
    Note.A: "A",
    Note.A_SHARP: "Bb",
    Note.B: "B",
}
