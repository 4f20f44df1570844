"""Configuration system for Intune."""

from .schema import IntuneConfig, DatabaseConfig, PeakConfig
from .loader import load_config, save_config, load_yaml, substitute_params

__all__ = [
    "IntuneConfig",
    "DatabaseConfig",
    "PeakConfig",
    "load_config",
    "save_config",
    "load_yaml",
    "substitute_params",
]
