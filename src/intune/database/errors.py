"""
Errors raised by the feature store.

None of these are retried or rolled back by the store; they propagate to the
caller at the point of failure.
"""


class FeatureDatabaseError(Exception):
    """Base class for feature store errors."""


class DatasetNotFound(FeatureDatabaseError):
    """The named table is absent from the file (corrupt file, wrong schema, or
    use before initialization)."""

    def __init__(self, path: str):
        super().__init__(f"Dataset not found: '{path}'")
        self.path = path


class DatasetNotCompatible(FeatureDatabaseError):
    """The table exists but its stored element type or rank differs from the
    catalog entry used to access it."""

    def __init__(self, path: str, reason: str):
        super().__init__(f"Dataset '{path}' is not compatible: {reason}")
        self.path = path


class DatasetWidthMismatch(FeatureDatabaseError):
    """A 2-D append supplied rows whose width differs from the table's fixed width."""

    def __init__(self, path: str, expected: int, actual: int):
        super().__init__(
            f"Dataset '{path}' has row width {expected}, got batch with width {actual}"
        )
        self.path = path
        self.expected = expected
        self.actual = actual


class BatchShapeMismatch(FeatureDatabaseError):
    """The flat values of an append do not fill the declared batch shape."""
