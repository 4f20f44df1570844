"""
Domain-typed read/write API over the feature store.

Each entity (events, labels, features) is spread across sibling tables, one
column per table. A write appends to every column in turn and a read assembles
one record from the same row of every column.

Partial-failure mode: column appends are independent. If a write fails partway
(for example the durations table is missing), the columns appended before the
failure stay persisted and the sibling tables are left with different row
counts. The same holds for a label batch whose notes width does not match
labels/notes: onset and polyphony are appended before the width error is
raised. Nothing is rolled back; callers that need consistency compare
``HDF5DatasetStore.row_counts()`` and recover at a higher level.
"""

import logging
from pathlib import Path
from typing import Optional, Sequence

import numpy as np

from intune.config.schema import DatabaseConfig
from intune.database.storage import HDF5DatasetStore
from intune.database.tables import Table
from intune.features.types import Event, Feature, Label

logger = logging.getLogger(__name__)

EVENT_TABLES = [
    Table.EVENTS_START,
    Table.EVENTS_DURATION,
    Table.EVENTS_NOTE,
    Table.EVENTS_VELOCITY,
]
LABEL_TABLES = [Table.LABELS_ONSET, Table.LABELS_POLYPHONY, Table.LABELS_NOTES]
FEATURE_TABLES = [
    Table.FEATURES_SPECTRUM,
    Table.FEATURES_FLUX,
    Table.FEATURES_PEAK_HEIGHTS,
    Table.FEATURES_PEAK_FLUX,
    Table.FEATURES_PEAK_LOCATIONS,
]


class FeatureDatabase:
    """
    Training data store for events, labels and features.

    Example:
        ```python
        config = DatabaseConfig(band_count=256, note_count=88)
        with FeatureDatabase(Path("train.h5"), config) as db:
            db.write_events([Event(start=0, duration=4410, note=60, velocity=0.75)])
            db.write_features(features)
            db.flush()

        with FeatureDatabase(Path("train.h5"), mode="r") as db:
            event = db.read_event_at_index(0)
        ```
    """

    def __init__(
        self,
        path: Path,
        config: Optional[DatabaseConfig] = None,
        mode: str = "w",
    ):
        self.store = HDF5DatasetStore(path, config=config, mode=mode)

    @property
    def chunk_size(self) -> int:
        return self.store.chunk_size

    def __enter__(self):
        self.store.open()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.store.close()

    def open(self) -> None:
        self.store.open()

    def close(self) -> None:
        self.store.close()

    def flush(self) -> None:
        self.store.flush()

    @property
    def event_count(self) -> int:
        return self.store.row_count(EVENT_TABLES[0])

    @property
    def label_count(self) -> int:
        return self.store.row_count(LABEL_TABLES[0])

    @property
    def feature_count(self) -> int:
        return self.store.row_count(FEATURE_TABLES[0])

    # =========================================================================
    # Events
    # =========================================================================

    def write_events(self, events: Sequence[Event]) -> None:
        """
        Append events, one column at a time.

        An empty batch performs zero-length appends. See the module docstring
        for the partial-failure mode.
        """
        batch_shape = (len(events),)
        self.store.append(Table.EVENTS_START, [e.start for e in events], batch_shape)
        self.store.append(Table.EVENTS_DURATION, [e.duration for e in events], batch_shape)
        self.store.append(Table.EVENTS_NOTE, [e.note for e in events], batch_shape)
        self.store.append(Table.EVENTS_VELOCITY, [e.velocity for e in events], batch_shape)
        logger.debug(f"Wrote {len(events)} events")

    def read_event_at_index(self, index: int) -> Event:
        return Event(
            start=self.store.read(Table.EVENTS_START, index),
            duration=self.store.read(Table.EVENTS_DURATION, index),
            note=self.store.read(Table.EVENTS_NOTE, index),
            velocity=self.store.read(Table.EVENTS_VELOCITY, index),
        )

    # =========================================================================
    # Labels
    # =========================================================================

    def write_labels(self, labels: Sequence[Label]) -> None:
        """
        Append labels.

        The notes width is taken from the first label in the batch. An empty
        batch writes nothing.
        """
        if not labels:
            return

        batch_shape = (len(labels),)
        self.store.append(Table.LABELS_ONSET, [label.onset for label in labels], batch_shape)
        self.store.append(Table.LABELS_POLYPHONY, [label.polyphony for label in labels], batch_shape)

        note_count = len(labels[0].notes)
        self.store.append(
            Table.LABELS_NOTES,
            np.concatenate([label.notes for label in labels]),
            (len(labels), note_count),
        )
        logger.debug(f"Wrote {len(labels)} labels")

    def read_label_at_index(self, index: int) -> Label:
        return Label(
            onset=self.store.read(Table.LABELS_ONSET, index),
            polyphony=self.store.read(Table.LABELS_POLYPHONY, index),
            notes=self.store.read(Table.LABELS_NOTES, index),
        )

    # =========================================================================
    # Features
    # =========================================================================

    def write_features(self, features: Sequence[Feature]) -> None:
        """
        Append features across the five feature tables.

        The width of every column is taken from the first feature's spectrum.
        An empty batch writes nothing.
        """
        if not features:
            return

        batch_shape = (len(features), features[0].band_count)
        for column, table in enumerate(FEATURE_TABLES):
            self.store.append(
                table,
                np.concatenate([f.vectors()[column] for f in features]),
                batch_shape,
            )
        logger.debug(f"Wrote {len(features)} features")

    def read_feature_at_index(self, index: int) -> Feature:
        return Feature(*(self.store.read(table, index) for table in FEATURE_TABLES))
