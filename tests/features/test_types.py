"""Tests for domain records."""

import pytest
import numpy as np

from intune.features import Event, Feature, Label


class TestEvent:
    """Tests for Event validation."""

    def test_valid_event(self):
        event = Event(start=0, duration=0, note=127, velocity=0.0)
        assert event.note == 127

    @pytest.mark.parametrize(
        "kwargs",
        [
            {"start": -1, "duration": 1, "note": 60},
            {"start": 0, "duration": -1, "note": 60},
            {"start": 0, "duration": 1, "note": 128},
            {"start": 0, "duration": 1, "note": -1},
            {"start": 2**31, "duration": 1, "note": 60},
            {"start": 0, "duration": 2**31, "note": 60},
        ],
    )
    def test_invalid_event(self, kwargs):
        with pytest.raises(ValueError):
            Event(**kwargs)

    def test_int32_limit_accepted(self):
        event = Event(start=2**31 - 1, duration=2**31 - 1, note=60)
        assert event.start == event.duration == 2**31 - 1

    def test_velocity_rounded_to_float32(self):
        event = Event(start=0, duration=1, note=60, velocity=0.1)
        assert event.velocity == float(np.float32(0.1))
        assert event == Event(start=0, duration=1, note=60, velocity=float(np.float32(0.1)))

    def test_events_are_immutable(self):
        event = Event(start=0, duration=1, note=60)
        with pytest.raises(AttributeError):
            event.note = 61


class TestVectors:
    """Tests for Label and Feature vector coercion."""

    def test_label_notes_coerced(self):
        label = Label(onset=1.0, polyphony=2.0, notes=[0, 1, 1])
        assert label.notes.dtype == np.float32
        np.testing.assert_array_equal(label.notes, [0.0, 1.0, 1.0])

    def test_empty_label(self):
        assert Label.empty(88).notes.shape == (88,)

    def test_feature_band_count(self):
        feature = Feature.empty(32)
        assert feature.band_count == 32
        assert all(vector.dtype == np.float32 for vector in feature.vectors())

    def test_label_scalars_rounded_to_float32(self):
        label = Label(onset=0.1, polyphony=0.3)
        assert label.onset == float(np.float32(0.1))
        assert label.polyphony == float(np.float32(0.3))


class TestEquality:
    """Tests for value equality of Label and Feature."""

    def test_equal_by_value(self):
        assert Label.empty(3) == Label.empty(3)
        assert Feature.empty(4) == Feature.empty(4)

    def test_label_differs(self):
        assert Label(onset=0.5, notes=[0, 1]) != Label(onset=0.5, notes=[1, 0])
        assert Label(onset=0.5, notes=[0, 1]) != Label(onset=0.25, notes=[0, 1])
        assert Label.empty(3) != Label.empty(4)

    def test_feature_differs(self):
        changed = Feature.empty(4)
        changed.peak_flux[2] = 1.0
        assert changed != Feature.empty(4)
        assert Feature.empty(4) != Feature.empty(5)

    def test_other_types(self):
        assert Label.empty(3) != "label"
        assert Feature.empty(4) != None  # noqa: E711
