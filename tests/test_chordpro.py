from songbook.chord import Chord, PositionedChord
from songbook.chordpro import ChordProFormatter, chord_row, inline_chords
from songbook.models import ParsedSong, SectionType, SongLine, SongSection
from songbook.parser import ChordProParser


def _song(**kwargs) -> ParsedSong:
    defaults = dict(title="Dark Star", artist="Grateful Dead")
    defaults.update(kwargs)
    return ParsedSong(**defaults)


def _line(text: str, *chords: tuple[int, str]) -> SongLine:
    return SongLine(
        text=text,
        chords=[PositionedChord(pos, Chord.parse(name)) for pos, name in chords],
    )


def _render(song: ParsedSong) -> str:
    return ChordProFormatter().render(song)


# ---------------------------------------------------------------------------
# Metadata
# ---------------------------------------------------------------------------


def test_title_and_artist_in_output():
    out = _render(_song())
    assert "{title: Dark Star}" in out
    assert "{artist: Grateful Dead}" in out


def test_optional_metadata_omitted_when_none():
    out = _render(_song())
    assert "{key:" not in out
    assert "{capo:" not in out
    assert "{tempo:" not in out


def test_all_metadata_emitted_in_order():
    out = _render(_song(
        subtitle="Live", composer="Hunter", key="A", tempo=90, time_signature="4/4", capo=2,
    ))
    assert out == (
        "{title: Dark Star}\n"
        "{subtitle: Live}\n"
        "{artist: Grateful Dead}\n"
        "{composer: Hunter}\n"
        "{key: A}\n"
        "{tempo: 90}\n"
        "{time: 4/4}\n"
        "{capo: 2}\n"
    )


# ---------------------------------------------------------------------------
# Sections
# ---------------------------------------------------------------------------


def test_verse_section_directives():
    song = _song(sections=[
        SongSection(SectionType.VERSE, label="1", lines=[_line("some lyrics", (0, "D"))])
    ])
    out = _render(song)
    assert "{start_of_verse: 1}" in out
    assert "{end_of_verse}" in out
    assert "[D]some lyrics" in out


def test_unlabeled_chorus_directives():
    song = _song(sections=[SongSection(SectionType.CHORUS, lines=[_line("chorus line")])])
    out = _render(song)
    assert "{start_of_chorus}\nchorus line\n{end_of_chorus}" in out


def test_bridge_section_directives():
    song = _song(sections=[SongSection(SectionType.BRIDGE, lines=[_line("bridge")])])
    out = _render(song)
    assert "{start_of_bridge}" in out
    assert "{end_of_bridge}" in out


def test_intro_rendered_as_comment():
    song = _song(sections=[SongSection(SectionType.INTRO, lines=[_line("  ", (0, "D"), (1, "G"))])])
    out = _render(song)
    assert "{comment: Intro}" in out
    assert "{start_of_intro}" not in out
    assert "[D] [G]" in out


def test_labeled_other_rendered_as_comment():
    song = _song(sections=[SongSection(SectionType.OTHER, label="Solo", lines=[_line("x")])])
    assert "{comment: Solo}" in _render(song)


def test_unlabeled_other_no_directive():
    song = _song(sections=[SongSection(SectionType.OTHER, lines=[_line("plain line")])])
    out = _render(song)
    assert "plain line" in out
    assert "{start_of" not in out
    assert "{comment" not in out


def test_blank_line_between_sections():
    song = _song(sections=[
        SongSection(SectionType.VERSE, lines=[_line("line one")]),
        SongSection(SectionType.CHORUS, lines=[_line("line two")]),
    ])
    assert "{end_of_verse}\n\n{start_of_chorus}" in _render(song)


def test_output_ends_with_newline():
    assert _render(_song()).endswith("\n")
    assert _render(ParsedSong()) == "\n"


def test_render_then_parse_keeps_lines():
    content = (
        "{title: Amazing Grace}\n"
        "{key: G}\n"
        "{start_of_verse: 1}\n"
        "[G]Amazing [G7]grace, how [C]sweet the [G]sound\n"
        "\n"
        "That [G/B]saved a [Em]wretch like [D]me\n"
        "{end_of_verse}\n"
        "{start_of_chorus}\n"
        "I once was [C]lost\n"
        "{end_of_chorus}\n"
    )
    song = ChordProParser.parse(content)
    assert ChordProParser.parse(_render(song)) == song


def test_bracketed_comment_rendered_as_comment():
    content = "{start_of_chorus}\n{c: [x2] repeat}\n[C]Hi\n{end_of_chorus}"
    song = ChordProParser.parse(content)
    out = _render(song)
    assert "{comment: [x2] repeat}" in out
    assert ChordProParser.parse(out) == song
    assert ChordProParser.parse(out).sections[0].lines[0].text == "[x2] repeat"


def test_bracketed_text_with_brace_written_inline():
    song = ParsedSong(sections=[SongSection(SectionType.VERSE, lines=[_line("[x] }")])])
    assert "\n[x] }\n" in _render(song)


# ---------------------------------------------------------------------------
# inline_chords / chord_row
# ---------------------------------------------------------------------------


def test_inline_chords():
    line = _line("Amazing grace", (0, "G"), (8, "G7"))
    assert inline_chords(line) == "[G]Amazing [G7]grace"


def test_inline_chords_at_end():
    assert inline_chords(_line("Hello", (5, "D"))) == "Hello[D]"


def test_inline_chords_without_chords():
    assert inline_chords(_line("Just words")) == "Just words"


def test_chord_row_columns():
    line = _line("Amazing grace", (0, "G"), (8, "G7"))
    assert chord_row(line) == "G       G7"


def test_chord_row_pushes_overlapping_chords():
    line = _line("Hi there", (0, "Cmaj7"), (2, "D"))
    assert chord_row(line) == "Cmaj7 D"


# ---------------------------------------------------------------------------
# Chord sheet
# ---------------------------------------------------------------------------


def test_chord_sheet_layout():
    song = _song(key="G", sections=[
        SongSection(
            SectionType.VERSE,
            label="1",
            lines=[_line("Amazing grace", (0, "G"), (8, "G7")), _line("no chords")],
        )
    ])
    assert ChordProFormatter().render_chord_sheet(song) == (
        "Dark Star\n"
        "Grateful Dead\n"
        "Key: G\n"
        "\n"
        "Verse 1:\n"
        "G       G7\n"
        "Amazing grace\n"
        "no chords\n"
    )


def test_chord_sheet_shows_capo_zero():
    out = ChordProFormatter().render_chord_sheet(_song(capo=0))
    assert out == "Dark Star\nGrateful Dead\nCapo: 0\n"


def test_chord_sheet_unlabeled_other_has_no_heading():
    song = ParsedSong(sections=[SongSection(SectionType.OTHER, lines=[_line("words")])])
    assert ChordProFormatter().render_chord_sheet(song) == "words\n"
