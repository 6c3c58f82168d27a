"""Additive sine synthesis: turns a chord's pitches into 16-bit PCM samples."""

from __future__ import annotations

import math
from collections.abc import Iterable
from enum import Enum, auto
from typing import TYPE_CHECKING

from tonal.config import HARMONICS, SAMPLE_MAX, SAMPLE_MIN

if TYPE_CHECKING:
    from tonal.models import Pitch


class OverflowMode(Enum):
    """How 16-bit sums behave when they leave the sample range."""
    WRAP = auto()      # two's complement wraparound (default)
    SATURATE = auto()  # clamp to [SAMPLE_MIN, SAMPLE_MAX]


def to_i16(value: float) -> int:
    """Truncate toward zero into the signed 16-bit range. NaN becomes 0."""
    if math.isnan(value):
        return 0
    if value >= SAMPLE_MAX:
        return SAMPLE_MAX
    if value <= SAMPLE_MIN:
        return SAMPLE_MIN
    return int(value)


def wrapping_add(a: int, b: int) -> int:
    return ((a + b - SAMPLE_MIN) & 0xFFFF) + SAMPLE_MIN


def saturating_add(a: int, b: int) -> int:
    return max(SAMPLE_MIN, min(SAMPLE_MAX, a + b))


class Samples:
    """Finite iterator of PCM samples for a fixed set of pitches.

    Yields exactly ``total`` samples, then stops. ``len()`` reports how many
    are left, so sinks can size their buffers up front. To start over, ask
    the chord for a new stream.
    """

    def __init__(
        self,
        current: int,
        total: int,
        pitches: Iterable[Pitch],
        rate: float,
        volume: float,
        overflow: OverflowMode = OverflowMode.WRAP,
    ) -> None:
        self.current = current
        self.total = total
        self.pitches = tuple(pitches)
        self.rate = rate
        self.volume = volume  # peak amplitude of the fundamental
        self.overflow = overflow
        self._freqs = tuple(p.freq() for p in self.pitches)
        self._add = wrapping_add if overflow == OverflowMode.WRAP else saturating_add

    def __iter__(self) -> Samples:
        return self

    def __next__(self) -> int:
        if self.current >= self.total:
            raise StopIteration

        time = self.current / self.rate
        add = self._add

        sample = 0
        for freq in self._freqs:
            subtotal = 0
            # Each overtone at half the amplitude of the one below it
            for h in range(1, HARMONICS + 1):
                amplitude = self.volume / 2.0 ** (h - 1)
                phase = time * 2.0 * math.pi * (freq * h)
                # sin() of an infinite phase is undefined; NaN truncates to 0
                wave = math.sin(phase) if math.isfinite(phase) else math.nan
                subtotal = add(subtotal, to_i16(wave * amplitude))
            sample = add(sample, subtotal)

        self.current += 1
        return sample

    @property
    def remaining(self) -> int:
        return max(0, self.total - self.current)

    def __len__(self) -> int:
        return self.remaining

    def __length_hint__(self) -> int:
        return self.remaining

    def __repr__(self) -> str:
        return (
            f"Samples(current={self.current}, total={self.total}, "
            f"pitches={list(self.pitches)!r}, rate={self.rate}, volume={self.volume})"
        )
