"""
Base command class for Intune CLI.

Provides abstract interface and shared functionality for CLI commands.
"""

from abc import ABC, abstractmethod
from argparse import ArgumentParser, Namespace
from pathlib import Path
from typing import Optional, Dict, Any
import sys

from intune.config import IntuneConfig


class CLICommand(ABC):
    """
    Abstract base class for CLI commands.

    Uses Command pattern for clean separation and testability.
    """

    @property
    @abstractmethod
    def name(self) -> str:
        """Command name (e.g., 'info')."""
        pass

    @property
    @abstractmethod
    def help(self) -> str:
        """Short help text for command."""
        pass

    @property
    @abstractmethod
    def description(self) -> str:
        """Detailed command description."""
        pass

    @abstractmethod
    def add_arguments(self, parser: ArgumentParser) -> None:
        """Add command-specific arguments to parser."""
        pass

    @abstractmethod
    def execute(self, args: Namespace) -> int:
        """
        Execute the command.

        Returns:
            Exit code (0 for success, non-zero for error)
        """
        pass

    def error(self, message: str, exit_code: int = 1) -> int:
        """Print error message and return exit code."""
        print(f"Error: {message}", file=sys.stderr)
        return exit_code

    def validate_file_exists(self, path: Path, description: str = "File") -> bool:
        """Return False (with error printed) if ``path`` does not exist."""
        if not path.exists():
            print(f"Error: {description} not found: {path}", file=sys.stderr)
            return False
        return True


class ConfigurableCommand(CLICommand):
    """
    Base class for commands that load configuration and apply CLI overrides.
    """

    def load_config(self, config_path: Optional[Path]) -> Optional[IntuneConfig]:
        """
        Load configuration from YAML file, or defaults when no path is given.

        Returns:
            Loaded IntuneConfig or None on error
        """
        from intune.config import load_config

        if config_path is None:
            return IntuneConfig()

        if not self.validate_file_exists(config_path, "Configuration file"):
            return None

        try:
            return load_config(config_path)
        except Exception as e:
            print(f"Error: Failed to load configuration: {e}", file=sys.stderr)
            return None

    def apply_overrides(self, config: Any, overrides: Dict[str, Any]) -> Any:
        """
        Apply CLI overrides to configuration and re-validate it.

        Args:
            config: IntuneConfig object to modify
            overrides: Dictionary of dotted path -> value; None values are skipped

        Returns:
            Validated copy of the configuration

        Raises:
            pydantic.ValidationError: If an override violates the schema

        Example:
            >>> config = command.apply_overrides(config, {"database.band_count": 512})
        """
        for path, value in overrides.items():
            if value is None:
                continue

            parts = path.split('.')
            obj = config
            for part in parts[:-1]:
                obj = getattr(obj, part)

            setattr(obj, parts[-1], value)

        return type(config).model_validate(config.model_dump())
