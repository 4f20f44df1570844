"""
Tests for peak extraction and pitch conversion.

Tests:
1. Pitch mapping (A4 = 440 Hz)
2. Local maxima detection, including boundaries
3. Height filtering
4. Pitch-spaced de-duplication
5. Concrete octave scenario
"""

import math

import pytest
import numpy as np

from intune.config import PeakConfig
from intune.features import Peak, PeakExtractor, Point, spectrum_points
from intune.features.pitch import freq_to_note, note_distance, note_to_freq


@pytest.fixture
def extractor():
    return PeakExtractor(height_cutoff=0.005, minimum_note_distance=0.5)


@pytest.fixture
def octave_points():
    freqs = [220, 224, 230, 440, 445, 450, 880]
    mags = [0.01, 0.2, 0.01, 0.01, 0.3, 0.01, 0.01]
    return [Point(x, y) for x, y in zip(freqs, mags)]


class TestPitch:
    """Tests for frequency/note conversion."""

    def test_reference_pitch(self):
        assert freq_to_note(440.0) == pytest.approx(69.0)
        assert freq_to_note(880.0) == pytest.approx(81.0)
        assert note_to_freq(60.0) == pytest.approx(261.6256, rel=1e-6)

    def test_inverse(self):
        for freq in [27.5, 100.0, 1234.5, 8000.0]:
            assert note_to_freq(freq_to_note(freq)) == pytest.approx(freq)

    def test_note_distance(self):
        assert note_distance(220.0, 440.0) == pytest.approx(12.0)
        assert note_distance(440.0, 220.0) == pytest.approx(12.0)

    def test_non_positive_frequency(self):
        with pytest.raises(ValueError):
            freq_to_note(0.0)


class TestFindPeaks:
    """Tests for local maxima detection."""

    def test_interior_maxima(self, extractor, octave_points):
        peaks = extractor.find_peaks(octave_points)
        assert [p.location for p in peaks] == [224, 445]

    def test_endpoints_excluded(self, extractor):
        points = [(100, 1.0), (200, 0.5), (300, 0.2), (400, 0.9)]
        assert extractor.find_peaks(points) == []

    def test_plateau_points_accepted(self, extractor):
        points = [(100, 0.1), (200, 0.5), (300, 0.5), (400, 0.1)]
        assert [p.location for p in extractor.find_peaks(points)] == [200, 300]

    @pytest.mark.parametrize("count", [0, 1, 2])
    def test_fewer_than_three_points(self, extractor, count):
        points = [(100.0 * (i + 1), 1.0) for i in range(count)]
        assert extractor.find_peaks(points) == []
        assert extractor.process(points) == []

    def test_accepts_array(self, extractor):
        points = np.array([[100.0, 0.0], [200.0, 1.0], [300.0, 0.0]])
        assert extractor.find_peaks(points) == [Peak(200.0, 1.0)]


class TestFilters:
    """Tests for height filtering and pitch spacing."""

    def test_height_cutoff_is_exclusive(self, extractor):
        peaks = [Peak(100.0, 0.005), Peak(200.0, 0.006), Peak(300.0, 0.001)]
        assert extractor.filter_by_height(peaks) == [Peak(200.0, 0.006)]

    def test_close_peaks_keep_taller(self, extractor):
        # 440 and 445 Hz are ~0.2 semitones apart
        peaks = [Peak(440.0, 0.1), Peak(445.0, 0.3)]
        assert extractor.choose_peaks(peaks) == [Peak(445.0, 0.3)]

    def test_close_peaks_keep_earlier_on_tie(self, extractor):
        peaks = [Peak(440.0, 0.3), Peak(445.0, 0.3)]
        assert extractor.choose_peaks(peaks) == [Peak(440.0, 0.3)]

    def test_window_recenters_on_winner(self, extractor):
        # 445 is within 0.5 semitones of 440, 457 is within 0.5 of 445 but not of 440
        peaks = [Peak(440.0, 0.1), Peak(445.0, 0.2), Peak(457.0, 0.3)]
        assert note_distance(440.0, 457.0) > 0.5
        assert extractor.choose_peaks(peaks) == [Peak(457.0, 0.3)]

    def test_spacing_is_logarithmic(self, extractor):
        # 10 Hz apart is over a semitone at 100 Hz but a fraction of one at 4 kHz
        low = extractor.choose_peaks([Peak(100.0, 1.0), Peak(110.0, 1.0)])
        high = extractor.choose_peaks([Peak(4000.0, 1.0), Peak(4010.0, 1.0)])
        assert len(low) == 2
        assert len(high) == 1

    def test_unsorted_input(self, extractor):
        peaks = [Peak(880.0, 0.2), Peak(220.0, 0.1)]
        assert [p.location for p in extractor.choose_peaks(peaks)] == [220.0, 880.0]

    def test_invalid_distance(self):
        with pytest.raises(ValueError):
            PeakExtractor(minimum_note_distance=0.0)


class TestProcess:
    """End-to-end tests for PeakExtractor.process."""

    def test_octave_scenario(self, extractor, octave_points):
        peaks = extractor.process(octave_points)
        assert peaks == [Peak(224.0, 0.2), Peak(445.0, 0.3)]

    def test_pure(self, extractor, octave_points):
        assert extractor.process(octave_points) == extractor.process(octave_points)

    def test_output_properties(self, extractor):
        rng = np.random.default_rng(7)
        spectrum = rng.random(512) * 0.05
        points = spectrum_points(spectrum, base_frequency=44100 / 4096)

        peaks = extractor.process(points)

        assert peaks
        locations = [p.location for p in peaks]
        assert locations == sorted(locations)
        for peak in peaks:
            assert peak.height > extractor.height_cutoff
        notes = [freq_to_note(p.location) for p in peaks]
        for a, b in zip(notes, notes[1:]):
            assert b - a >= extractor.minimum_note_distance - 1e-9

    def test_from_config(self):
        extractor = PeakExtractor.from_config(
            PeakConfig(height_cutoff=0.25, minimum_note_distance=1.0)
        )
        assert extractor.height_cutoff == 0.25
        assert extractor.minimum_note_distance == 1.0

        points = [(220, 0.0), (224, 0.2), (230, 0.0), (440, 0.0), (445, 0.3), (450, 0.0)]
        assert extractor.process(points) == [Peak(445.0, 0.3)]


def test_spectrum_points():
    points = spectrum_points([0.0, 0.5, 0.25], base_frequency=10.0)
    assert points == [Point(0.0, 0.0), Point(10.0, 0.5), Point(20.0, 0.25)]
    assert math.isclose(points[1].x, 10.0)
