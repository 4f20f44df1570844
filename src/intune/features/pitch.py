"""
Frequency/pitch conversion in 12-tone equal temperament, A4 = 440 Hz.

Note numbers are continuous MIDI-style values: 69.0 is A4, 69.5 is a quarter
tone above it.
"""

import math

A4_FREQUENCY = 440.0
A4_NOTE = 69.0


def freq_to_note(freq: float) -> float:
    """Continuous note number of ``freq`` (Hz). Raises ValueError for freq <= 0."""
    if freq <= 0:
        raise ValueError(f"Frequency must be positive to map to a note, got {freq}")
    return 12.0 * math.log2(freq / A4_FREQUENCY) + A4_NOTE


def note_to_freq(note: float) -> float:
    return A4_FREQUENCY * 2.0 ** ((note - A4_NOTE) / 12.0)


def note_distance(freq_a: float, freq_b: float) -> float:
    """Separation of two frequencies in semitones."""
    return abs(freq_to_note(freq_a) - freq_to_note(freq_b))
