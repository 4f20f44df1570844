"""
Intune feature storage and peak extraction.

Persists note events, supervision labels and per-window spectral features for
the transcription pipeline in a chunked HDF5 store, and provides the peak
extractor that turns a magnitude spectrum into perceptually spaced peaks.
"""

__version__ = "1.0.0"
