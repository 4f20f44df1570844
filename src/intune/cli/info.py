"""
Info command for Intune CLI.

Displays the groups and tables of a feature store.
"""

from argparse import ArgumentParser, Namespace
from pathlib import Path

from .base import CLICommand


class InfoCommand(CLICommand):
    """Command to display feature store information."""

    @property
    def name(self) -> str:
        return "info"

    @property
    def help(self) -> str:
        return "Display feature store information"

    @property
    def description(self) -> str:
        return """
Display the groups, tables, shapes and element types of a feature store.

Examples:
  intune info --database data/train.h5
        """

    def add_arguments(self, parser: ArgumentParser) -> None:
        """Add info command arguments."""
        parser.add_argument(
            "--database", type=Path, required=True, metavar="PATH", help="Path to HDF5 feature store"
        )

    def execute(self, args: Namespace) -> int:
        """Execute feature store info command."""
        if not self.validate_file_exists(args.database, "Feature store"):
            return 1

        try:
            return self._print_info(args.database)
        except Exception as e:
            return self.error(f"Failed to read feature store: {e}")

    def _print_info(self, database_path: Path) -> int:
        import h5py

        with h5py.File(database_path, "r") as f:
            print("=" * 60)
            print(f"INTUNE FEATURE STORE: {database_path.name}")
            print("=" * 60)

            if "creation_date" in f.attrs:
                print(f"Created: {f.attrs['creation_date']}")
            if "chunk_size" in f.attrs:
                print(f"Chunk size: {f.attrs['chunk_size']}")

            print("\nTables:")
            for key in f.keys():
                group = f[key]
                if isinstance(group, h5py.Group):
                    print(f"  {key}/ (group):")
                    for subkey in group.keys():
                        dataset = group[subkey]
                        if isinstance(dataset, h5py.Dataset):
                            print(f"    {subkey}: {dataset.shape} {dataset.dtype}")
                elif isinstance(group, h5py.Dataset):
                    print(f"  {key}: {group.shape} {group.dtype}")

            file_size_mb = database_path.stat().st_size / (1024**2)
            print(f"\nFile size: {file_size_mb:.2f} MB")
            print("=" * 60)

        return 0
