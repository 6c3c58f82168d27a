"""Entry point for `python -m tonal` or the `tonal` console script."""

from __future__ import annotations

import argparse
import logging

from tonal.config import DEFAULT_BPM, DEFAULT_SAMPLE_RATE, DEFAULT_VOLUME
from tonal.models import Chord, Length, Pitch, PitchParseError
from tonal.synth import OverflowMode

logger = logging.getLogger("tonal")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="tonal: play a chord with additive sine synthesis")
    parser.add_argument("pitches", nargs="*", metavar="PITCH", help="Pitches such as A4, C#3 or Bb2")
    parser.add_argument("--major", metavar="ROOT", help="Play the major triad built on ROOT")
    parser.add_argument(
        "--length",
        default="quarter",
        choices=[length.name.lower() for length in Length],
        help="Note length (default: quarter)",
    )
    parser.add_argument("--bpm", type=float, default=DEFAULT_BPM, help="Tempo in beats per minute")
    parser.add_argument("--volume", type=float, default=DEFAULT_VOLUME, help="Volume, nominally 0.0 to 1.0")
    parser.add_argument("--rate", type=int, default=DEFAULT_SAMPLE_RATE, help="Sample rate in Hz")
    parser.add_argument("--saturate", action="store_true", help="Clamp instead of wrapping on overflow")
    parser.add_argument("--no-play", action="store_true", help="Only report the chord, do not open audio")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    return parser


def chord_from_args(args: argparse.Namespace) -> Chord:
    """Build the chord described by parsed command-line arguments."""
    length = Length.from_symbol(args.length)
    if args.major:
        return Chord.major(Pitch.parse(args.major), length, args.volume)
    return Chord([Pitch.parse(text) for text in args.pitches], length, args.volume)


def main(argv: list[str] | None = None) -> None:
    parser = build_parser()
    args = parser.parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s %(message)s",
    )

    if args.major and args.pitches:
        parser.error("give either PITCH arguments or --major, not both")
    if not args.major and not args.pitches:
        parser.error("nothing to play: give PITCH arguments or --major")

    try:
        chord = chord_from_args(args)
    except PitchParseError as exc:
        parser.error(str(exc))

    overflow = OverflowMode.SATURATE if args.saturate else OverflowMode.WRAP
    logger.info(
        "%s %s: %d samples at %d Hz",
        args.length,
        " ".join(str(p) for p in chord.pitches),
        chord.sample_count(args.bpm, args.rate),
        args.rate,
    )
    for pitch in chord.pitches:
        logger.debug("%s = %.2f Hz", pitch, pitch.freq())

    if args.no_play:
        return

    from tonal.audio import AudioEngine

    engine = AudioEngine(sample_rate=args.rate, overflow=overflow)
    try:
        engine.play_chord(chord, args.bpm)
    finally:
        engine.shutdown()


if __name__ == "__main__":
    main()
