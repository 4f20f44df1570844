"""
HDF5 storage backend for the feature store.

Owns the open file handle and exposes two generic primitives over any catalog
table: append a batch of rows and read one row by index. Tables are
append-only; no dataset is deleted, shrunk or rewritten in place.

Single writer per file. Readers should only open a file after the writer has
flushed.
"""

import logging
from datetime import datetime
from pathlib import Path
from typing import Dict, Optional, Sequence, Tuple, Union, cast

import h5py
import numpy as np

from intune.config.schema import DatabaseConfig
from intune.database.errors import (
    BatchShapeMismatch,
    DatasetNotCompatible,
    DatasetNotFound,
    DatasetWidthMismatch,
)
from intune.database.tables import Table, create_in_file

logger = logging.getLogger(__name__)

RowValue = Union[int, float, np.ndarray]


class HDF5DatasetStore:
    """
    Chunked, append-only HDF5 store organized into catalog tables.

    Mode "w" truncates the file and creates every table from the catalog.
    Modes "a" and "r" open an existing file as-is, so a file written with a
    different schema surfaces DatasetNotFound or DatasetNotCompatible on use.

    Example:
        ```python
        with HDF5DatasetStore(Path("train.h5"), DatabaseConfig(band_count=512)) as store:
            store.append(Table.EVENTS_START, [0, 512, 1024], (3,))
            store.flush()
            store.read(Table.EVENTS_START, 1)  # 512
        ```
    """

    def __init__(
        self,
        path: Path,
        config: Optional[DatabaseConfig] = None,
        mode: str = "w",
    ):
        """
        Args:
            path: Path to the HDF5 file
            config: Store geometry, used only when creating (mode "w")
            mode: "w" to create, "a" to append to an existing file, "r" to read
        """
        if mode not in ("w", "a", "r"):
            raise ValueError(f"Unsupported mode '{mode}', expected 'w', 'a' or 'r'")

        self.path = Path(path)
        self.config = config or DatabaseConfig()
        self.mode = mode
        self.file: Optional[h5py.File] = None

    @property
    def chunk_size(self) -> int:
        return self.config.chunk_size

    def __enter__(self):
        self.open()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()

    def open(self) -> None:
        """Open the file, creating the catalog tables in mode "w"."""
        if self.file is not None:
            return

        if self.mode == "w":
            self.path.parent.mkdir(parents=True, exist_ok=True)
            self.file = h5py.File(self.path, "w")
            self.file.attrs["creation_date"] = datetime.now().isoformat()
            self.file.attrs["chunk_size"] = self.chunk_size
            create_in_file(self.file, self.chunk_size, self.config)
            logger.info(
                f"Created feature store {self.path} "
                f"(chunk_size={self.chunk_size}, band_count={self.config.band_count}, "
                f"note_count={self.config.note_count})"
            )
        else:
            if not self.path.exists():
                raise FileNotFoundError(f"Feature store not found: {self.path}")
            self.file = h5py.File(self.path, self.mode)
            logger.info(f"Opened feature store {self.path} (mode={self.mode})")

    def close(self) -> None:
        """Flush and close the file. Safe to call on a closed store."""
        if self.file is not None:
            if self.mode != "r":
                self.file.flush()
            self.file.close()
            self.file = None
            logger.info(f"Closed feature store {self.path}")

    def flush(self) -> None:
        """Force all writes since the last flush to disk."""
        self._require_open().flush()

    def _require_open(self) -> h5py.File:
        if self.file is None:
            raise RuntimeError("HDF5 file not opened. Use context manager or call open()")
        return self.file

    def _dataset(self, table: Table) -> h5py.Dataset:
        """Open ``table`` and check it against its catalog entry."""
        file = self._require_open()

        node = file.get(table.path)
        if not isinstance(node, h5py.Dataset):
            raise DatasetNotFound(table.path)

        dataset = cast(h5py.Dataset, node)
        if dataset.dtype != table.element_type.dtype:
            raise DatasetNotCompatible(
                table.path,
                f"stored as {dataset.dtype}, expected {table.element_type.value}",
            )
        if dataset.ndim != table.rank:
            raise DatasetNotCompatible(
                table.path,
                f"stored with rank {dataset.ndim}, expected {table.rank}",
            )
        return dataset

    def row_count(self, table: Table) -> int:
        return self._dataset(table).shape[0]

    def row_counts(self) -> Dict[Table, int]:
        """Row count of every catalog table present in the file."""
        file = self._require_open()
        counts = {}
        for table in Table:
            node = file.get(table.path)
            if isinstance(node, h5py.Dataset):
                counts[table] = node.shape[0]
        return counts

    def width(self, table: Table) -> Optional[int]:
        """Fixed row width of a 2-D table, or None for 1-D tables."""
        dataset = self._dataset(table)
        if dataset.ndim == 1:
            return None
        return dataset.shape[1]

    def append(
        self,
        table: Table,
        values: Union[Sequence, np.ndarray],
        batch_shape: Tuple[int, ...],
    ) -> None:
        """
        Append a batch of rows to ``table``.

        Args:
            table: Catalog table to extend
            values: Flat row-major values, ``prod(batch_shape)`` elements
            batch_shape: (rows,) for 1-D tables, (rows, width) for 2-D tables

        Raises:
            DatasetNotFound: If the table is absent
            DatasetNotCompatible: If the stored dtype/rank differ from the catalog
            BatchShapeMismatch: If values don't fill batch_shape or its rank is wrong
            DatasetWidthMismatch: If a 2-D batch width differs from the table width
        """
        dataset = self._dataset(table)

        if len(batch_shape) != dataset.ndim:
            raise BatchShapeMismatch(
                f"Batch shape {tuple(batch_shape)} has rank {len(batch_shape)}, "
                f"'{table.path}' has rank {dataset.ndim}"
            )

        data = np.asarray(values, dtype=table.element_type.dtype).ravel()
        expected_size = int(np.prod(batch_shape))
        if data.size != expected_size:
            raise BatchShapeMismatch(
                f"Got {data.size} values for batch shape {tuple(batch_shape)} "
                f"({expected_size} expected) on '{table.path}'"
            )

        if dataset.ndim == 2 and batch_shape[1] != dataset.shape[1]:
            raise DatasetWidthMismatch(table.path, dataset.shape[1], batch_shape[1])

        row_count = batch_shape[0]
        if row_count == 0:
            return

        start_idx = dataset.shape[0]
        end_idx = start_idx + row_count
        dataset.resize(end_idx, axis=0)
        dataset[start_idx:end_idx] = data.reshape(batch_shape)

        logger.debug(f"Appended {row_count} rows to {table.path} [{start_idx}:{end_idx}]")

    def read(self, table: Table, index: int, columns: Optional[slice] = None) -> RowValue:
        """
        Read one row of ``table``.

        Args:
            table: Catalog table to read
            index: Zero-based row index
            columns: Optional column range for 2-D tables (full row by default)

        Returns:
            Python int/float for 1-D tables, float32 array for 2-D tables

        Raises:
            DatasetNotFound: If the table is absent
            DatasetNotCompatible: If the stored dtype/rank differ from the catalog
            IndexError: If index is outside [0, row_count)
        """
        dataset = self._dataset(table)

        row_count = dataset.shape[0]
        if not 0 <= index < row_count:
            raise IndexError(
                f"Row {index} out of range for '{table.path}' with {row_count} rows"
            )

        if dataset.ndim == 1:
            if columns is not None:
                raise ValueError(f"'{table.path}' is 1-D and has no columns to select")
            return dataset[index].item()

        return np.asarray(dataset[index, columns if columns is not None else slice(None)])
