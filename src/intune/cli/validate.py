"""
Validate command for Intune CLI.

Checks that a feature store matches the table catalog and that sibling tables
of each entity hold the same number of rows.
"""

from argparse import ArgumentParser, Namespace
from pathlib import Path
from typing import List, Tuple

from .base import CLICommand


def check_store(database_path: Path) -> Tuple[List[str], List[str]]:
    """
    Validate a feature store.

    Returns:
        (passed, failed) check descriptions
    """
    from intune.database import FeatureDatabaseError, HDF5DatasetStore, Table
    from intune.database.feature_database import EVENT_TABLES, FEATURE_TABLES, LABEL_TABLES

    passed: List[str] = []
    failed: List[str] = []

    with HDF5DatasetStore(database_path, mode="r") as store:
        counts = {}
        for table in Table:
            try:
                counts[table] = store.row_count(table)
                passed.append(f"Table '{table.path}' present ({counts[table]} rows)")
            except FeatureDatabaseError as e:
                failed.append(str(e))

        entities = [("events", EVENT_TABLES), ("labels", LABEL_TABLES), ("features", FEATURE_TABLES)]
        for entity, tables in entities:
            entity_counts = {table.path: counts[table] for table in tables if table in counts}
            if len(set(entity_counts.values())) > 1:
                failed.append(f"Row count mismatch in {entity}: {entity_counts}")
            elif len(entity_counts) == len(tables):
                passed.append(f"Row counts consistent in {entity}")

    return passed, failed


class ValidateCommand(CLICommand):
    """Command to validate feature store integrity."""

    @property
    def name(self) -> str:
        return "validate"

    @property
    def help(self) -> str:
        return "Validate feature store integrity"

    @property
    def description(self) -> str:
        return """
Validate a feature store against the table catalog.

Checks:
- Every table exists with the expected element type and rank
- Sibling tables of each entity (events, labels, features) have equal row
  counts, which a partially failed write leaves unequal

Examples:
  intune validate --database data/train.h5
        """

    def add_arguments(self, parser: ArgumentParser) -> None:
        """Add validate command arguments."""
        parser.add_argument(
            "--database", type=Path, required=True, metavar="PATH", help="Path to HDF5 feature store"
        )

    def execute(self, args: Namespace) -> int:
        """Execute feature store validation."""
        if not self.validate_file_exists(args.database, "Feature store"):
            return 1

        try:
            passed, failed = check_store(args.database)
        except Exception as e:
            return self.error(f"Validation failed: {e}")

        print("=" * 60)
        print(f"VALIDATING FEATURE STORE: {args.database.name}")
        print("=" * 60)
        for message in passed:
            print(f"  ✓ {message}")
        for message in failed:
            print(f"  ✗ {message}")
        print("=" * 60)

        if failed:
            print(f"FAILED: {len(failed)} check(s) failed")
            return 1

        print(f"PASSED: {len(passed)} check(s)")
        return 0
