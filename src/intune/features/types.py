"""
Domain records persisted by the feature store.

Event, Label and Feature each map to one row across their sibling tables.
Point and Peak are transient values of the peak extraction step.
"""

from dataclasses import dataclass, field
from typing import NamedTuple

import numpy as np

MIDI_NOTE_RANGE = range(0, 128)
INT32_MAX = int(np.iinfo(np.int32).max)


class Point(NamedTuple):
    """One sample of a magnitude curve: frequency x, magnitude y."""

    x: float
    y: float


class Peak(NamedTuple):
    """A local maximum surviving the height and spacing filters."""

    location: float
    height: float


def _as_vector(values) -> np.ndarray:
    return np.asarray(values, dtype=np.float32).ravel()


def _as_float32(value) -> float:
    return float(np.float32(value))


@dataclass(frozen=True)
class Event:
    """
    One recorded note.

    Attributes:
        start: Sample/frame offset of the note onset
        duration: Length in frames
        note: MIDI note number (0-127)
        velocity: Loudness, nominally 0-1 (not enforced)
    """

    start: int
    duration: int
    note: int
    velocity: float = 1.0

    def __post_init__(self):
        if not 0 <= self.start <= INT32_MAX:
            raise ValueError(f"Event start must be in [0, {INT32_MAX}], got {self.start}")
        if not 0 <= self.duration <= INT32_MAX:
            raise ValueError(f"Event duration must be in [0, {INT32_MAX}], got {self.duration}")
        if self.note not in MIDI_NOTE_RANGE:
            raise ValueError(f"Event note must be a MIDI note number 0-127, got {self.note}")

        # Stored as float32
        object.__setattr__(self, "velocity", _as_float32(self.velocity))


@dataclass(eq=False)
class Label:
    """
    Supervision target for one analysis window.

    Attributes:
        onset: Strength of a note beginning in the window
        polyphony: Expected number of sounding notes
        notes: Per-pitch activation vector [note_count]
    """

    onset: float = 0.0
    polyphony: float = 0.0
    notes: np.ndarray = field(default_factory=lambda: np.zeros(0, dtype=np.float32))

    def __post_init__(self):
        self.onset = _as_float32(self.onset)
        self.polyphony = _as_float32(self.polyphony)
        self.notes = _as_vector(self.notes)

    def __eq__(self, other):
        if not isinstance(other, Label):
            return NotImplemented
        return (
            self.onset == other.onset
            and self.polyphony == other.polyphony
            and np.array_equal(self.notes, other.notes)
        )

    @classmethod
    def empty(cls, note_count: int) -> "Label":
        return cls(notes=np.zeros(note_count, dtype=np.float32))


@dataclass(eq=False)
class Feature:
    """
    Derived signal representation for one analysis window.

    All five vectors share one width, the configured band count.
    """

    spectrum: np.ndarray
    spectral_flux: np.ndarray
    peak_heights: np.ndarray
    peak_flux: np.ndarray
    peak_locations: np.ndarray

    def __post_init__(self):
        self.spectrum = _as_vector(self.spectrum)
        self.spectral_flux = _as_vector(self.spectral_flux)
        self.peak_heights = _as_vector(self.peak_heights)
        self.peak_flux = _as_vector(self.peak_flux)
        self.peak_locations = _as_vector(self.peak_locations)

        widths = {len(vector) for vector in self.vectors()}
        if len(widths) != 1:
            raise ValueError(f"Feature vectors must share one width, got {sorted(widths)}")

    def __eq__(self, other):
        if not isinstance(other, Feature):
            return NotImplemented
        return all(
            np.array_equal(mine, theirs) for mine, theirs in zip(self.vectors(), other.vectors())
        )

    @property
    def band_count(self) -> int:
        return len(self.spectrum)

    def vectors(self):
        return (
            self.spectrum,
            self.spectral_flux,
            self.peak_heights,
            self.peak_flux,
            self.peak_locations,
        )

    @classmethod
    def empty(cls, band_count: int) -> "Feature":
        return cls(*(np.zeros(band_count, dtype=np.float32) for _ in range(5)))
