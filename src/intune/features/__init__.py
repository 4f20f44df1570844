"""
Domain records and peak extraction.

Main Components:
    - Event, Label, Feature: records persisted by intune.database
    - PeakExtractor: local maxima, height filter and pitch-spaced de-duplication
"""

from intune.features.types import Event, Label, Feature, Point, Peak
from intune.features.peaks import PeakExtractor, spectrum_points

__all__ = [
    "Event",
    "Label",
    "Feature",
    "Point",
    "Peak",
    "PeakExtractor",
    "spectrum_points",
]
