"""Feature store: table catalog, HDF5 dataset store and the domain facade."""

from .errors import (
    FeatureDatabaseError,
    DatasetNotFound,
    DatasetNotCompatible,
    DatasetWidthMismatch,
    BatchShapeMismatch,
)
from .tables import Table, ElementType, create_in_file
from .storage import HDF5DatasetStore
from .feature_database import FeatureDatabase

__all__ = [
    "FeatureDatabaseError",
    "DatasetNotFound",
    "DatasetNotCompatible",
    "DatasetWidthMismatch",
    "BatchShapeMismatch",
    "Table",
    "ElementType",
    "create_in_file",
    "HDF5DatasetStore",
    "FeatureDatabase",
]
