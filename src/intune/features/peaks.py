"""
Peak extraction over a magnitude spectrum.

Pipeline:
1. Local maxima: interior points with y[i-1] <= y[i] >= y[i+1]
2. Height filter: drop peaks with y <= height_cutoff
3. Pitch spacing: walk peaks by ascending frequency, merging any peak that
   falls within minimum_note_distance semitones of the current window into
   the taller of the two

Spacing is measured in semitones rather than Hz, so close low-frequency
partials are not over-merged and distant high-frequency ones are not
under-merged.

The extractor holds only its two constants; ``process`` is a pure function of
its input and safe to call from any thread.

Example:
    >>> extractor = PeakExtractor(height_cutoff=0.005, minimum_note_distance=0.5)
    >>> peaks = extractor.process(spectrum_points(spectrum, base_frequency=44100 / 4096))
"""

from typing import List, Optional, Sequence, Tuple, Union

import numpy as np

from intune.config.schema import PeakConfig
from intune.features.pitch import freq_to_note, note_to_freq
from intune.features.types import Peak, Point

PointsLike = Union[Sequence[Point], Sequence[Tuple[float, float]], np.ndarray]


def spectrum_points(spectrum: Sequence[float], base_frequency: float) -> List[Point]:
    """Pair each spectrum bin with its frequency, ``base_frequency * bin``."""
    return [Point(base_frequency * i, float(y)) for i, y in enumerate(spectrum)]


class PeakExtractor:
    """
    Sparse, perceptually spaced peak selection.

    Attributes:
        height_cutoff: Peaks must be strictly taller than this
        minimum_note_distance: Minimum spacing between kept peaks, in semitones
    """

    def __init__(self, height_cutoff: float = 0.005, minimum_note_distance: float = 0.5):
        if minimum_note_distance <= 0:
            raise ValueError(
                f"minimum_note_distance must be positive, got {minimum_note_distance}"
            )
        self.height_cutoff = height_cutoff
        self.minimum_note_distance = minimum_note_distance

    @classmethod
    def from_config(cls, config: PeakConfig) -> "PeakExtractor":
        return cls(
            height_cutoff=config.height_cutoff,
            minimum_note_distance=config.minimum_note_distance,
        )

    def process(self, points: PointsLike) -> List[Peak]:
        """
        Extract peaks from (frequency, magnitude) points sampled at increasing
        frequency. Fewer than 3 points yield no peaks.
        """
        return self.filter_peaks(self.find_peaks(points))

    def find_peaks(self, points: PointsLike) -> List[Peak]:
        """Interior local maxima, plateaus included."""
        data = np.asarray(points, dtype=np.float64).reshape(-1, 2)
        if len(data) < 3:
            return []

        y = data[:, 1]
        is_peak = (y[:-2] <= y[1:-1]) & (y[1:-1] >= y[2:])
        indices = np.nonzero(is_peak)[0] + 1

        return [Peak(float(data[i, 0]), float(data[i, 1])) for i in indices]

    def filter_peaks(self, peaks: List[Peak]) -> List[Peak]:
        return self.choose_peaks(self.filter_by_height(peaks))

    def filter_by_height(self, peaks: List[Peak]) -> List[Peak]:
        return [peak for peak in peaks if peak.height > self.height_cutoff]

    def choose_peaks(self, peaks: List[Peak]) -> List[Peak]:
        """
        Keep the tallest peak of each pitch window.

        Ties keep the earlier (lower-frequency) peak.
        """
        chosen: List[Peak] = []
        window: Optional[Tuple[float, float]] = None

        for peak in sorted(peaks, key=lambda p: p.location):
            if window is not None and window[0] <= peak.location <= window[1]:
                if chosen[-1].height < peak.height:
                    chosen[-1] = peak
                    window = self.cutoff_range(peak.location)
            else:
                chosen.append(peak)
                window = self.cutoff_range(peak.location)

        return chosen

    def cutoff_range(self, freq: float) -> Tuple[float, float]:
        """Frequency window within minimum_note_distance semitones of ``freq``."""
        note = freq_to_note(freq)
        return (
            note_to_freq(note - self.minimum_note_distance),
            note_to_freq(note + self.minimum_note_distance),
        )
