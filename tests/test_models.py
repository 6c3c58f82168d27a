"""Tests for pitches, lengths and chords."""

import math

import pytest

from tonal.config import MAX_SAMPLE_COUNT
from tonal.models import (
    Chord,
    InvalidFrequencyError,
    Length,
    Name,
    Pitch,
    PitchParseError,
    _round_half_away,
)


def test_default_pitch_is_a4():
    assert Pitch() == Pitch(0)
    assert Pitch.from_name(Name.A, 4) == Pitch()


def test_from_name():
    assert Pitch.from_name(Name.C, 3) == Pitch(-21)
    assert Pitch.from_name(Name.C, 4) == Pitch(-9)
    assert Pitch.from_name(Name.A, 5) == Pitch(12)
    assert Pitch.from_name(Name.B, -1) == Pitch(-58)


def test_freq_matches_equal_temperament():
    assert abs(Pitch(0).freq() - 440.0) < 1e-9
    assert Pitch.from_name(Name.C, 4).freq() == pytest.approx(261.63, abs=0.01)
    assert Pitch(12).freq() == pytest.approx(880.0)
    assert Pitch(-12).freq() == pytest.approx(220.0)
    for octave in range(0, 9):
        for name in Name:
            pitch = Pitch.from_name(name, octave)
            expected = 440.0 * 2.0 ** (pitch.semitones / 12.0)
            assert pitch.freq() == pytest.approx(expected, rel=1e-12)


def test_freq_of_extreme_pitch():
    assert Pitch(100_000).freq() == math.inf
    assert Pitch(-100_000).freq() == 0.0


def test_from_freq_round_trip():
    assert Pitch.from_freq(440.0) == Pitch.from_name(Name.A, 4)
    assert Pitch.from_freq(261.63) == Pitch.from_name(Name.C, 4)
    assert Pitch.from_freq(130.81) == Pitch.from_name(Name.C, 3)
    for semitones in range(-48, 49):
        pitch = Pitch(semitones)
        assert Pitch.from_freq(pitch.freq()) == pitch


def test_from_freq_snaps_to_nearest_semitone():
    assert Pitch.from_freq(445.0) == Pitch(0)
    assert Pitch.from_freq(460.0) == Pitch(1)


@pytest.mark.parametrize("freq", [0.0, -0.0, -1.0, -440.0, float("nan"), float("inf")])
def test_from_freq_rejects_invalid(freq):
    with pytest.raises(InvalidFrequencyError):
        Pitch.from_freq(freq)


def test_invalid_frequency_is_value_error():
    with pytest.raises(ValueError):
        Pitch.from_freq(0.0)


def test_pitch_ordering_and_hashing():
    assert Pitch(-3) < Pitch(0) < Pitch(4)
    assert sorted([Pitch(7), Pitch(-2), Pitch(0)]) == [Pitch(-2), Pitch(0), Pitch(7)]
    assert len({Pitch(1), Pitch(1), Pitch(2)}) == 2


def test_pitch_arithmetic():
    c4 = Pitch.from_name(Name.C, 4)
    assert c4 + 4 == Pitch.from_name(Name.E, 4)
    assert 7 + c4 == Pitch.from_name(Name.G, 4)
    assert c4 - 1 == Pitch.from_name(Name.B, 3)
    assert Pitch.from_name(Name.G, 4) - c4 == 7


def test_parse():
    assert Pitch.parse("A4") == Pitch(0)
    assert Pitch.parse("c4") == Pitch(-9)
    assert Pitch.parse("C#3") == Pitch.from_name(Name.C_SHARP, 3)
    assert Pitch.parse("Bb2") == Pitch.from_name(Name.A_SHARP, 2)
    assert Pitch.parse("Cb4") == Pitch.from_name(Name.B, 3)
    assert Pitch.parse("B#3") == Pitch.from_name(Name.C, 4)
    assert Pitch.parse("G-1") == Pitch.from_name(Name.G, -1)


@pytest.mark.parametrize("text", ["", "H4", "A", "4", "A##4", "Ax4"])
def test_parse_rejects_malformed(text):
    with pytest.raises(PitchParseError):
        Pitch.parse(text)


def test_str():
    assert str(Pitch(0)) == "A4"
    assert str(Pitch(-9)) == "C4"
    assert str(Pitch(3)) == "C5"
    assert str(Pitch.parse("Db3")) == "C#3"
    assert str(Pitch(-58)) == "B-1"


def test_name_from_symbol():
    assert Name.from_symbol("C") is Name.C
    assert Name.from_symbol("f#") is Name.F_SHARP
    assert Name.from_symbol("Bb") is Name.A_SHARP
    assert Name.from_symbol("Cb") is Name.B
    assert Name.from_symbol("E#") is Name.F
    with pytest.raises(PitchParseError):
        Name.from_symbol("X")


def test_length_durations():
    assert Length.WHOLE.duration(60.0) == 4.0
    assert Length.HALF.duration(60.0) == 2.0
    assert Length.QUARTER.duration(60.0) == 1.0
    assert Length.EIGHTH.duration(60.0) == 0.5
    assert Length.SIXTEENTH.duration(60.0) == 0.25


def test_doubling_bpm_halves_duration():
    for length in Length:
        assert length.duration(120.0) == pytest.approx(length.duration(60.0) / 2)


def test_length_unvalidated_bpm():
    assert Length.QUARTER.duration(-60.0) == -1.0
    assert Length.WHOLE.duration(0.0) == math.inf


def test_length_from_symbol():
    assert Length.from_symbol("eighth") is Length.EIGHTH
    assert Length.from_symbol("Whole") is Length.WHOLE
    with pytest.raises(PitchParseError):
        Length.from_symbol("dotted")


def test_major_chord():
    c4 = Pitch.from_name(Name.C, 4)
    chord = Chord.major(c4, Length.WHOLE, 0.5)
    assert chord.pitch_view() == (c4, Pitch.from_name(Name.E, 4), Pitch.from_name(Name.G, 4))
    assert chord.length is Length.WHOLE
    assert chord.volume == 0.5


def test_chord_pitches_are_editable():
    chord = Chord([Pitch(0)], Length.QUARTER, 0.5)
    chord.pitches.append(Pitch(4))
    chord.pitches.insert(0, Pitch(-5))
    chord.pitches.remove(Pitch(0))
    assert chord.pitch_view() == (Pitch(-5), Pitch(4))


def test_pitch_view_is_a_snapshot():
    chord = Chord([Pitch(0)], Length.QUARTER, 0.5)
    view = chord.pitch_view()
    chord.pitches.append(Pitch(3))
    assert view == (Pitch(0),)


def test_chord_allows_empty_and_duplicates():
    assert Chord([], Length.HALF, 1.0).pitch_view() == ()
    assert Chord([Pitch(0), Pitch(0)], Length.HALF, 1.0).pitch_view() == (Pitch(0), Pitch(0))


def test_sample_count():
    chord = Chord([Pitch(0)], Length.QUARTER, 0.5)
    assert chord.sample_count(120.0, 8000) == 4000
    assert Chord([Pitch(0)], Length.EIGHTH, 0.5).sample_count(120.0, 8000) == 2000
    assert chord.sample_count(60.0, 44100) == 44100


def test_sample_count_rounds_half_away_from_zero():
    chord = Chord([Pitch(0)], Length.SIXTEENTH, 0.5)
    assert chord.sample_count(60.0, 2) == 1
    assert chord.sample_count(60.0, 10) == 3


def test_sample_count_unvalidated_bpm():
    chord = Chord([Pitch(0)], Length.QUARTER, 0.5)
    assert chord.sample_count(-120.0, 8000) == 0
    assert chord.sample_count(0.0, 8000) == MAX_SAMPLE_COUNT


def test_round_half_away_from_zero():
    assert _round_half_away(0.5) == 1
    assert _round_half_away(-0.5) == -1
    assert _round_half_away(2.5) == 3
    assert _round_half_away(-2.5) == -3
    assert _round_half_away(1.4) == 1
    assert _round_half_away(-1.6) == -2


def test_round_just_below_half_rounds_down():
    assert _round_half_away(0.49999999999999994) == 0
    assert _round_half_away(-0.49999999999999994) == 0
