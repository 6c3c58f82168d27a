"""Global constants and default settings."""

# Tuning: 12-tone equal temperament anchored at A4
REFERENCE_FREQ = 440.0
REFERENCE_OCTAVE = 4
REFERENCE_NAME_OFFSET = 9  # A, counted in semitones up from C
SEMITONES_PER_OCTAVE = 12

# Synthesis
VOLUME_GAIN = 8192.0  # chord volume -> sample amplitude
HARMONICS = 4

# Signed 16-bit PCM range
SAMPLE_MIN = -32768
SAMPLE_MAX = 32767

# Sample counters are unsigned 32-bit
MAX_SAMPLE_COUNT = 2**32 - 1

# Playback defaults
DEFAULT_BPM = 120.0
DEFAULT_SAMPLE_RATE = 44100
DEFAULT_VOLUME = 0.5
