"""Chord tokens as they appear inside ``[...]`` brackets.

Only the root (and optional slash bass) is understood; everything after the
root is carried verbatim as ``quality`` (``m7``, ``sus4``, ``maj7(#11)`` ...).
"""

from dataclasses import dataclass

from .note import Note


def split_root(text: str) -> tuple[str, str]:
    """Split *text* into ``(root, rest)``.

    The root is the first character, or the first two when the second one is
    ``#`` or ``b``.  No validation is done here.
    """
    if len(text) >= 2 and text[1] in "#b":
        return text[:2], text[2:]
    return text[:1], text[1:]


def transpose_note_name(name: str, semitones: int, use_flats: bool) -> str:
    """Transpose a bare note name, returning it unchanged if it does not parse."""
    parsed = Note.parse(name)
    if parsed is None:
        return name
    note, _ = parsed
    return note.transpose(semitones).spell(use_flats)


@dataclass(frozen=True)
class Chord:
    """A parsed chord: root note, quality suffix and optional bass note.

    Example: ``F#m7/C#`` → ``Chord(root="F#", quality="m7", bass="C#")``.
    """

    root: str
    quality: str = ""
    bass: str | None = None

    @classmethod
    def parse(cls, text: str) -> "Chord | None":
        """Parse a chord token such as ``Am7``, ``C#dim`` or ``G/B``.

        A slash is only treated as a bass separator when the text after the
        *last* ``/`` parses as a note; otherwise it stays in the quality
        (``Am/X`` → root ``A``, quality ``m/X``).  Returns ``None`` when the
        root is not a note.
        """
        text = text.strip()
        if not text:
            return None

        main, bass = text, None
        head, slash, tail = text.rpartition("/")
        if slash and Note.parse(tail) is not None:
            main, bass = head, tail

        if not main:
            return None

        root, quality = split_root(main)
        if Note.parse(root) is None:
            return None

        return cls(root=root, quality=quality, bass=bass)

    def transpose(self, semitones: int, use_flats: bool = False) -> "Chord":
        """Return a new chord with root and bass moved by *semitones*."""
        return Chord(
            root=transpose_note_name(self.root, semitones, use_flats),
            quality=self.quality,
            bass=(
                transpose_note_name(self.bass, semitones, use_flats)
                if self.bass is not None
                else None
            ),
        )

    def to_dict(self) -> dict:
        return {"root": self.root, "quality": self.quality, "bass": self.bass}

    def __str__(self) -> str:
        if self.bass is not None:
            return f"{self.root}{self.quality}/{self.bass}"
        return f"{self.root}{self.quality}"


@dataclass(frozen=True)
class PositionedChord:
    """A chord anchored at a character offset of its line's text."""

    position: int
    chord: Chord

    def to_dict(self) -> dict:
        return {"position": self.position, "chord": self.chord.to_dict()}
