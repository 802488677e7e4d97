import pytest

from songbook.note import Note

# ---------------------------------------------------------------------------
# parse
# ---------------------------------------------------------------------------


@pytest.mark.parametrize(
    "text, expected",
    [
        ("C", Note.C),
        ("D", Note.D),
        ("E", Note.E),
        ("F", Note.F),
        ("G", Note.G),
        ("A", Note.A),
        ("B", Note.B),
        ("H", Note.B),
    ],
)
def test_parse_naturals(text, expected):
    assert Note.parse(text) == (expected, False)


@pytest.mark.parametrize(
    "text, expected",
    [
        ("C#", Note.C_SHARP),
        ("D#", Note.D_SHARP),
        ("E#", Note.F),
        ("F#", Note.F_SHARP),
        ("G#", Note.G_SHARP),
        ("A#", Note.A_SHARP),
        ("B#", Note.C),
    ],
)
def test_parse_sharps(text, expected):
    assert Note.parse(text) == (expected, False)


@pytest.mark.parametrize(
    "text, expected",
    [
        ("Cb", Note.B),
        ("Db", Note.C_SHARP),
        ("Eb", Note.D_SHARP),
        ("Fb", Note.E),
        ("Gb", Note.F_SHARP),
        ("Ab", Note.G_SHARP),
        ("Bb", Note.A_SHARP),
    ],
)
def test_parse_flats_report_flat_spelling(text, expected):
    assert Note.parse(text) == (expected, True)


def test_parse_lowercase():
    assert Note.parse("c") == (Note.C, False)
    assert Note.parse("c#") == (Note.C_SHARP, False)
    assert Note.parse("h") == (Note.B, False)


def test_parse_trims_whitespace():
    assert Note.parse("  G  ") == (Note.G, False)


def test_parse_ignores_trailing_quality():
    assert Note.parse("Am7") == (Note.A, False)
    assert Note.parse("Bbm") == (Note.A_SHARP, True)


def test_parse_invalid():
    assert Note.parse("") is None
    assert Note.parse("   ") is None
    assert Note.parse("X") is None
    assert Note.parse("1") is None


def test_every_spelling_round_trips_through_semitone():
    for letter in "ABCDEFGHabcdefgh":
        for modifier in ("", "#", "b"):
            parsed = Note.parse(letter + modifier)
            assert parsed is not None
            note, _ = parsed
            assert Note.from_semitone(note.to_semitone()) is note


# ---------------------------------------------------------------------------
# Semitones
# ---------------------------------------------------------------------------


def test_to_semitone_order():
    assert [n.to_semitone() for n in Note] == list(range(12))


def test_from_semitone_wraps():
    assert Note.from_semitone(0) is Note.C
    assert Note.from_semitone(1) is Note.C_SHARP
    assert Note.from_semitone(12) is Note.C
    assert Note.from_semitone(13) is Note.C_SHARP
    assert Note.from_semitone(-1) is Note.B


# ---------------------------------------------------------------------------
# transpose
# ---------------------------------------------------------------------------


def test_transpose_up_and_down():
    assert Note.C.transpose(2) is Note.D
    assert Note.C.transpose(-2) is Note.A_SHARP
    assert Note.B.transpose(1) is Note.C


def test_transpose_large_offsets():
    assert Note.C.transpose(26) is Note.D
    assert Note.C.transpose(-25) is Note.B


def test_full_octave_is_identity():
    for note in Note:
        assert note.transpose(12) is note
        assert note.transpose(-12) is note


# ---------------------------------------------------------------------------
# Spelling
# ---------------------------------------------------------------------------


def test_sharp_spelling():
    assert [n.to_sharp_string() for n in Note] == [
        "C", "C#", "D", "D#", "E", "F", "F#", "G", "G#", "A", "A#", "B",
    ]


def test_flat_spelling():
    assert [n.to_flat_string() for n in Note] == [
        "C", "Db", "D", "Eb", "E", "F", "Gb", "G", "Ab", "A", "Bb", "B",
    ]


def test_spell_selects_table():
    assert Note.G_SHARP.spell(use_flats=True) == "Ab"
    assert Note.G_SHARP.spell(use_flats=False) == "G#"
