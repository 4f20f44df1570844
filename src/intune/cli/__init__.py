"""
Intune CLI package.

Commands use the Command pattern for clean separation and testability.
"""

from .base import CLICommand, ConfigurableCommand
from .create import CreateCommand
from .info import InfoCommand
from .peaks import PeaksCommand
from .validate import ValidateCommand

__all__ = [
    "CLICommand",
    "ConfigurableCommand",
    "CreateCommand",
    "InfoCommand",
    "PeaksCommand",
    "ValidateCommand",
]
