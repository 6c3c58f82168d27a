"""Audio playback of chord sample streams via pygame.mixer."""

from __future__ import annotations

import logging
import time
from array import array
from collections.abc import Iterable, Iterator
from itertools import chain

import pygame

from tonal.config import DEFAULT_SAMPLE_RATE
from tonal.models import Chord
from tonal.synth import OverflowMode, Samples

logger = logging.getLogger(__name__)


class AudioError(RuntimeError):
    """Raised when the audio device cannot be opened or used."""


def pcm_bytes(samples: Iterable[int]) -> bytes:
    """Pack signed 16-bit samples as native-endian mono PCM."""
    return array("h", samples).tobytes()


class AudioEngine:
    """Plays chords through the default output device as mono 16-bit PCM."""

    def __init__(
        self,
        sample_rate: int = DEFAULT_SAMPLE_RATE,
        overflow: OverflowMode = OverflowMode.WRAP,
    ) -> None:
        self.overflow = overflow
        try:
            pygame.mixer.init(frequency=sample_rate, size=-16, channels=1)
        except pygame.error as exc:
            raise AudioError(f"Could not open audio device: {exc}") from exc

        settings = pygame.mixer.get_init()
        if settings is None:
            raise AudioError("Audio mixer failed to initialize")
        actual_rate, _, channels = settings
        if channels != 1:
            pygame.mixer.quit()
            raise AudioError(f"Mono output unavailable (device opened with {channels} channels)")
        if actual_rate != sample_rate:
            logger.warning("Requested %d Hz, device opened at %d Hz", sample_rate, actual_rate)
        self.sample_rate = actual_rate
        logger.debug("Mixer ready: %d Hz mono", self.sample_rate)

    def render(self, chords: Iterable[Chord], bpm: float) -> bytes:
        """Render chords back to back into one PCM buffer."""
        return pcm_bytes(chain.from_iterable(self._streams(chords, bpm)))

    def _streams(self, chords: Iterable[Chord], bpm: float) -> Iterator[Samples]:
        for chord in chords:
            stream = chord.samples(bpm, self.sample_rate, overflow=self.overflow)
            logger.debug("Rendering %d samples for %s", len(stream), [str(p) for p in chord.pitches])
            yield stream

    def play_chord(self, chord: Chord, bpm: float, wait: bool = True) -> None:
        self.play_chords([chord], bpm, wait=wait)

    def play_chords(self, chords: Iterable[Chord], bpm: float, wait: bool = True) -> None:
        """Play a sequence of chords without gaps. Blocks until done unless ``wait`` is False."""
        data = self.render(chords, bpm)
        if not data:
            logger.info("Nothing to play")
            return
        sound = pygame.mixer.Sound(buffer=data)
        logger.info("Playing %.2f s of audio", sound.get_length())
        channel = sound.play()
        if wait:
            while channel is not None and channel.get_busy():
                time.sleep(0.01)

    def stop(self) -> None:
        pygame.mixer.stop()

    def shutdown(self) -> None:
        self.stop()
        pygame.mixer.quit()
