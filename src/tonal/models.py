"""Core music-theory models: note names, lengths, pitches and chords."""

from __future__ import annotations

import math
import re
from dataclasses import dataclass, field
from enum import Enum

from tonal.config import (
    DEFAULT_VOLUME,
    MAX_SAMPLE_COUNT,
    REFERENCE_FREQ,
    REFERENCE_NAME_OFFSET,
    REFERENCE_OCTAVE,
    SEMITONES_PER_OCTAVE,
    VOLUME_GAIN,
)
from tonal.synth import OverflowMode, Samples

_SEMITONE_RATIO = 2.0 ** (1.0 / SEMITONES_PER_OCTAVE)

_LETTERS = {"C": 0, "D": 2, "E": 4, "F": 5, "G": 7, "A": 9, "B": 11}
_ACCIDENTALS = {"": 0, "#": 1, "b": -1}
_PITCH_RE = re.compile(r"^([A-Ga-g])([#b]?)(-?\d+)$")
_NAME_RE = re.compile(r"^([A-Ga-g])([#b]?)$")


class PitchParseError(ValueError):
    """Raised when a pitch, note name or length cannot be parsed from text."""


class InvalidFrequencyError(ValueError):
    """Raised when a frequency has no corresponding pitch."""


def _round_half_away(value: float) -> int:
    """Round to the nearest integer, halves away from zero."""
    magnitude = abs(value)
    whole = math.floor(magnitude)
    if magnitude - whole >= 0.5:
        whole += 1
    return int(math.copysign(whole, value))


def _split_symbol(letter: str, accidental: str) -> int:
    """Semitones above C for a letter/accidental pair, unwrapped (Cb = -1, B# = 12)."""
    return _LETTERS[letter.upper()] + _ACCIDENTALS[accidental]


class Name(Enum):
    """The twelve pitch classes, counted in semitones up from C."""

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

    @property
    def symbol(self) -> str:
        return self.name.replace("_SHARP", "#")

    @classmethod
    def from_symbol(cls, text: str) -> Name:
        """Parse ``"C"``, ``"F#"`` or ``"Bb"``; flats map to the enharmonic sharp."""
        match = _NAME_RE.match(text.strip())
        if match is None:
            raise PitchParseError(f"Unknown note name: {text!r}")
        return cls(_split_symbol(*match.groups()) % SEMITONES_PER_OCTAVE)


class Length(Enum):
    """Note lengths, valued as the power of two relative to a quarter note."""

    WHOLE = -2
    HALF = -1
    QUARTER = 0
    EIGHTH = 1
    SIXTEENTH = 2

    def duration(self, bpm: float) -> float:
        """Seconds this length lasts at the given tempo.

        The tempo is not validated: a negative bpm gives a negative duration
        and a bpm of zero gives an infinite one.
        """
        beats_per_minute = bpm * 2.0**self.value
        if beats_per_minute == 0:
            return math.inf
        return 60.0 / beats_per_minute

    @classmethod
    def from_symbol(cls, text: str) -> Length:
        try:
            return cls[text.strip().upper()]
        except KeyError:
            raise PitchParseError(f"Unknown note length: {text!r}") from None


@dataclass(frozen=True, order=True)
class Pitch:
    """A pitch stored as the number of semitones away from A4 (440 Hz).

    Constructing directly from an integer is valid, which allows doing math
    on pitches when building music programmatically. The default is A4.
    """

    semitones: int = 0

    @classmethod
    def from_name(cls, name: Name, octave: int) -> Pitch:
        """Pitch for a note name in a given octave, e.g. ``(Name.C, 4)`` for middle C."""
        return cls(
            (octave - REFERENCE_OCTAVE) * SEMITONES_PER_OCTAVE
            + name.value
            - REFERENCE_NAME_OFFSET
        )

    @classmethod
    def from_freq(cls, freq: float) -> Pitch:
        """Nearest equal-temperament pitch to a frequency in hertz.

        Frequencies slightly off a semitone snap to the closest one.

        Raises:
            InvalidFrequencyError: If ``freq`` is not a positive finite number.
        """
        if not (freq > 0 and math.isfinite(freq)):
            raise InvalidFrequencyError(f"Frequency must be greater than 0, got {freq}")
        return cls(_round_half_away(SEMITONES_PER_OCTAVE * math.log2(freq / REFERENCE_FREQ)))

    @classmethod
    def parse(cls, text: str) -> Pitch:
        """Parse scientific pitch notation such as ``"A4"``, ``"C#3"`` or ``"Bb-1"``."""
        match = _PITCH_RE.match(text.strip())
        if match is None:
            raise PitchParseError(f"Invalid pitch: {text!r}")
        letter, accidental, octave = match.groups()
        return cls(
            (int(octave) - REFERENCE_OCTAVE) * SEMITONES_PER_OCTAVE
            + _split_symbol(letter, accidental)
            - REFERENCE_NAME_OFFSET
        )

    def freq(self) -> float:
        """Frequency in hertz."""
        try:
            return REFERENCE_FREQ * _SEMITONE_RATIO**self.semitones
        except OverflowError:
            return math.inf

    @property
    def name(self) -> Name:
        return Name((self.semitones + REFERENCE_NAME_OFFSET) % SEMITONES_PER_OCTAVE)

    @property
    def octave(self) -> int:
        return REFERENCE_OCTAVE + (self.semitones + REFERENCE_NAME_OFFSET) // SEMITONES_PER_OCTAVE

    def transpose(self, semitones: int) -> Pitch:
        return Pitch(self.semitones + semitones)

    def __add__(self, other: int) -> Pitch:
        if isinstance(other, int):
            return self.transpose(other)
        return NotImplemented

    __radd__ = __add__

    def __sub__(self, other):
        """``pitch - 3`` transposes down; ``pitch - pitch`` is the interval in semitones."""
        if isinstance(other, Pitch):
            return self.semitones - other.semitones
        if isinstance(other, int):
            return self.transpose(-other)
        return NotImplemented

    def __str__(self) -> str:
        return f"{self.name.symbol}{self.octave}"


@dataclass
class Chord:
    """A pitch or group of pitches sharing one length and one volume.

    Single notes are chords of one pitch. ``pitches`` may be edited in place
    between calls to :meth:`samples`; the volume is not range-checked and
    scales the output amplitude directly.
    """

    pitches: list[Pitch] = field(default_factory=list)
    length: Length = Length.QUARTER
    volume: float = DEFAULT_VOLUME

    @classmethod
    def major(cls, root: Pitch, length: Length, volume: float) -> Chord:
        """Root, major third and perfect fifth."""
        return cls([root, root + 4, root + 7], length, volume)

    def pitch_view(self) -> tuple[Pitch, ...]:
        """Read-only snapshot of the current pitches."""
        return tuple(self.pitches)

    def sample_count(self, bpm: float, rate: int) -> int:
        """Number of samples this chord lasts at the given tempo and sample rate."""
        count = self.length.duration(bpm) * float(rate)
        if math.isnan(count):
            return 0
        if count >= MAX_SAMPLE_COUNT:
            return MAX_SAMPLE_COUNT
        return max(0, _round_half_away(count))

    def samples(
        self,
        bpm: float,
        rate: int,
        overflow: OverflowMode = OverflowMode.WRAP,
    ) -> Samples:
        """Iterator of signed 16-bit PCM samples for this chord.

        Each call returns an independent stream starting at the first sample.
        The stream works on a snapshot of the pitches, so later edits to the
        chord do not affect a stream already handed out.
        """
        return Samples(
            0,
            self.sample_count(bpm, rate),
            self.pitch_view(),
            float(rate),
            self.volume * VOLUME_GAIN,
            overflow=overflow,
        )
