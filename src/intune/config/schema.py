"""
Configuration schemas for Intune using Pydantic.

Two sections:
- database: geometry of the HDF5 feature store (chunking and table widths)
- peaks: constants of the peak extraction algorithm
"""

from pydantic import BaseModel, Field


class DatabaseConfig(BaseModel):
    """
    Feature store geometry.

    Widths are fixed when the store is created; every later batch written to a
    2-D table must match them.

    Attributes:
        chunk_size: Rows per HDF5 chunk (I/O granularity only)
        band_count: Row width of every features/* table
        note_count: Row width of labels/notes
    """

    chunk_size: int = Field(default=1024, ge=1)
    band_count: int = Field(default=256, ge=1)
    note_count: int = Field(default=88, ge=1)


class PeakConfig(BaseModel):
    """Peak extractor constants."""

    height_cutoff: float = Field(default=0.005, ge=0.0)
    minimum_note_distance: float = Field(default=0.5, gt=0.0)  # semitones


class IntuneConfig(BaseModel):
    """Root configuration."""

    database: DatabaseConfig = Field(default_factory=DatabaseConfig)
    peaks: PeakConfig = Field(default_factory=PeakConfig)
