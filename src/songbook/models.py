from dataclasses import dataclass, field
from enum import Enum

from .chord import PositionedChord


class SectionType(Enum):
    VERSE = "verse"
    CHORUS = "chorus"
    BRIDGE = "bridge"
    PRE_CHORUS = "pre_chorus"
    INTRO = "intro"
    OUTRO = "outro"
    INTERLUDE = "interlude"
    TAG = "tag"
    ENDING = "ending"
    OTHER = "other"

    @classmethod
    def from_keyword(cls, keyword: str) -> "SectionType":
        """Map a section keyword or alias (``v``, ``pc``, ``coda`` ...) to a type."""
        return _KEYWORD_ALIASES.get(keyword.strip().lower(), cls.OTHER)

    @property
    def display_name(self) -> str:
        return _DISPLAY_NAMES[self]


_KEYWORD_ALIASES = {
    "verse": SectionType.VERSE,
    "v": SectionType.VERSE,
    "chorus": SectionType.CHORUS,
    "c": SectionType.CHORUS,
    "bridge": SectionType.BRIDGE,
    "b": SectionType.BRIDGE,
    "prechorus": SectionType.PRE_CHORUS,
    "pre-chorus": SectionType.PRE_CHORUS,
    "pc": SectionType.PRE_CHORUS,
    "intro": SectionType.INTRO,
    "outro": SectionType.OUTRO,
    "interlude": SectionType.INTERLUDE,
    "tag": SectionType.TAG,
    "ending": SectionType.ENDING,
    "coda": SectionType.ENDING,
}

_DISPLAY_NAMES = {
    SectionType.VERSE: "Verse",
    SectionType.CHORUS: "Chorus",
    SectionType.BRIDGE: "Bridge",
    SectionType.PRE_CHORUS: "Pre-Chorus",
    SectionType.INTRO: "Intro",
    SectionType.OUTRO: "Outro",
    SectionType.INTERLUDE: "Interlude",
    SectionType.TAG: "Tag",
    SectionType.ENDING: "Ending",
    SectionType.OTHER: "",
}


@dataclass
class SongLine:
    """A single lyric line with its chord brackets removed.

    Example: ``"[G]Amazing [G7]grace"`` becomes text ``"Amazing grace"`` with
    ``G`` at position 0 and ``G7`` at position 8.
    """

    text: str = ""
    chords: list[PositionedChord] = field(default_factory=list)

    @property
    def has_chords(self) -> bool:
        return bool(self.chords)

    def to_dict(self) -> dict:
        return {"text": self.text, "chords": [c.to_dict() for c in self.chords]}


@dataclass
class SongSection:
    """A block of lines (verse, chorus, bridge, etc.)."""

    section_type: SectionType
    label: str | None = None  # e.g. "1" from {start_of_verse: 1}
    lines: list[SongLine] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            "section_type": self.section_type.value,
            "label": self.label,
            "lines": [line.to_dict() for line in self.lines],
        }


@dataclass
class ParsedSong:
    """Structured form of a ChordPro document."""

    title: str | None = None
    subtitle: str | None = None
    artist: str | None = None
    composer: str | None = None
    key: str | None = None
    tempo: int | None = None
    time_signature: str | None = None
    capo: int | None = None
    sections: list[SongSection] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            "title": self.title,
            "subtitle": self.subtitle,
            "artist": self.artist,
            "composer": self.composer,
            "key": self.key,
            "tempo": self.tempo,
            "time_signature": self.time_signature,
            "capo": self.capo,
            "sections": [s.to_dict() for s in self.sections],
        }
