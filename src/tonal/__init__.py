"""tonal: a basic music theory and synthesis library."""

from tonal.models import Chord, InvalidFrequencyError, Length, Name, Pitch, PitchParseError
from tonal.synth import OverflowMode, Samples

__all__ = [
    "Chord",
    "InvalidFrequencyError",
    "Length",
    "Name",
    "OverflowMode",
    "Pitch",
    "PitchParseError",
    "Samples",
]
