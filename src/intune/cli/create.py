"""
Create command for Intune CLI.

Creates an empty feature store with every catalog table.
"""

from argparse import ArgumentParser, Namespace
from pathlib import Path

from .base import ConfigurableCommand


class CreateCommand(ConfigurableCommand):
    """Command to create an empty feature store from configuration."""

    @property
    def name(self) -> str:
        return "create"

    @property
    def help(self) -> str:
        return "Create an empty feature store"

    @property
    def description(self) -> str:
        return """
Create an empty feature store. Any existing file at the output path is
truncated.

Examples:
  # Default geometry
  intune create --output data/train.h5

  # From configuration, overriding the band count
  intune create --config configs/piano.yaml --output data/train.h5 --band-count 512
        """

    def add_arguments(self, parser: ArgumentParser) -> None:
        """Add create command arguments."""
        parser.add_argument(
            "--output", type=Path, required=True, metavar="PATH", help="Path to HDF5 file to create"
        )
        parser.add_argument(
            "--config", type=Path, metavar="PATH", help="Path to YAML configuration file"
        )

        override_group = parser.add_argument_group("configuration overrides")
        override_group.add_argument("--chunk-size", type=int, metavar="N", help="Rows per chunk")
        override_group.add_argument(
            "--band-count", type=int, metavar="N", help="Width of feature tables"
        )
        override_group.add_argument(
            "--note-count", type=int, metavar="N", help="Width of the label notes table"
        )

    def execute(self, args: Namespace) -> int:
        """Execute store creation."""
        from intune.database import HDF5DatasetStore

        config = self.load_config(args.config)
        if config is None:
            return 1

        try:
            config = self.apply_overrides(
                config,
                {
                    "database.chunk_size": args.chunk_size,
                    "database.band_count": args.band_count,
                    "database.note_count": args.note_count,
                },
            )
            with HDF5DatasetStore(args.output, config.database, mode="w"):
                pass
        except Exception as e:
            return self.error(f"Failed to create feature store: {e}")

        print(f"Created feature store: {args.output}")
        return 0
