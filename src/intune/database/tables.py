"""
Table catalog for the feature store.

Every logical table is a member of :class:`Table`, carrying its dataset path,
element type and the configuration field that fixes its row width (``None``
for 1-D tables holding one scalar per row). :func:`create_in_file` is the only
place datasets are created.

Schema:
    /events/
        start [N] int32
        duration [N] int32
        note [N] int32
        velocity [N] float32
    /labels/
        onset [N] float32
        polyphony [N] float32
        notes [N, note_count] float32
    /features/
        spectrum [N, band_count] float32
        spectralFlux [N, band_count] float32
        peakHeights [N, band_count] float32
        peakFlux [N, band_count] float32
        peakLocations [N, band_count] float32
"""

import logging
from enum import Enum
from typing import List, Optional, Tuple

import h5py
import numpy as np

from intune.config.schema import DatabaseConfig

logger = logging.getLogger(__name__)

GROUPS = ("events", "labels", "features")


class ElementType(Enum):
    """Stored element type of a table."""

    INT32 = "int32"
    FLOAT32 = "float32"

    @property
    def dtype(self) -> np.dtype:
        return np.dtype(self.value)


class Table(Enum):
    """Closed set of tables in a feature store."""

    EVENTS_START = ("events/start", ElementType.INT32, None)
    EVENTS_DURATION = ("events/duration", ElementType.INT32, None)
    EVENTS_NOTE = ("events/note", ElementType.INT32, None)
    EVENTS_VELOCITY = ("events/velocity", ElementType.FLOAT32, None)

    LABELS_ONSET = ("labels/onset", ElementType.FLOAT32, None)
    LABELS_POLYPHONY = ("labels/polyphony", ElementType.FLOAT32, None)
    LABELS_NOTES = ("labels/notes", ElementType.FLOAT32, "note_count")

    FEATURES_SPECTRUM = ("features/spectrum", ElementType.FLOAT32, "band_count")
    FEATURES_FLUX = ("features/spectralFlux", ElementType.FLOAT32, "band_count")
    FEATURES_PEAK_HEIGHTS = ("features/peakHeights", ElementType.FLOAT32, "band_count")
    FEATURES_PEAK_FLUX = ("features/peakFlux", ElementType.FLOAT32, "band_count")
    FEATURES_PEAK_LOCATIONS = ("features/peakLocations", ElementType.FLOAT32, "band_count")

    def __init__(self, path: str, element_type: ElementType, width_field: Optional[str]):
        self.path = path
        self.element_type = element_type
        self.width_field = width_field

    @property
    def group(self) -> str:
        return self.path.split("/", 1)[0]

    @property
    def rank(self) -> int:
        return 1 if self.width_field is None else 2

    def width(self, configuration: DatabaseConfig) -> Optional[int]:
        """Row width fixed by ``configuration``, or None for 1-D tables."""
        if self.width_field is None:
            return None
        return getattr(configuration, self.width_field)

    def chunks(self, chunk_size: int, configuration: DatabaseConfig) -> Tuple[int, ...]:
        width = self.width(configuration)
        if width is None:
            return (chunk_size,)
        return (chunk_size, width)

    @classmethod
    def in_group(cls, group: str) -> List["Table"]:
        return [table for table in cls if table.group == group]


def create_in_file(file: h5py.File, chunk_size: int, configuration: DatabaseConfig) -> None:
    """
    Create every catalog table in ``file`` with zero rows.

    The row dimension is unbounded; the secondary dimension of 2-D tables is
    fixed from ``configuration``. Missing groups are created.
    """
    for group in GROUPS:
        file.require_group(group)

    for table in Table:
        width = table.width(configuration)
        shape: Tuple[int, ...] = (0,) if width is None else (0, width)
        maxshape: Tuple[Optional[int], ...] = (None,) if width is None else (None, width)
        file.create_dataset(
            table.path,
            shape=shape,
            maxshape=maxshape,
            dtype=table.element_type.dtype,
            chunks=table.chunks(chunk_size, configuration),
        )
        logger.debug(f"Created {table.path} {shape} {table.element_type.value}")
