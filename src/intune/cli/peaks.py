"""
Peaks command for Intune CLI.

Runs the peak extractor over a spectrum stored as a CSV of
frequency,magnitude rows.
"""

from argparse import ArgumentParser, Namespace
from pathlib import Path

from .base import ConfigurableCommand


class PeaksCommand(ConfigurableCommand):
    """Command to extract peaks from a spectrum file."""

    @property
    def name(self) -> str:
        return "peaks"

    @property
    def help(self) -> str:
        return "Extract peaks from a spectrum"

    @property
    def description(self) -> str:
        return """
Extract pitch-spaced peaks from a two-column CSV (frequency, magnitude).
Peaks are printed one per line as "frequency,height".

Examples:
  intune peaks --input spectrum.csv
  intune peaks --input spectrum.csv --height-cutoff 0.01 --min-note-distance 1.0
        """

    def add_arguments(self, parser: ArgumentParser) -> None:
        """Add peaks command arguments."""
        parser.add_argument(
            "--input", type=Path, required=True, metavar="PATH", help="CSV of frequency,magnitude"
        )
        parser.add_argument(
            "--config", type=Path, metavar="PATH", help="Path to YAML configuration file"
        )

        override_group = parser.add_argument_group("configuration overrides")
        override_group.add_argument(
            "--height-cutoff", type=float, metavar="Y", help="Minimum peak height (exclusive)"
        )
        override_group.add_argument(
            "--min-note-distance",
            type=float,
            metavar="SEMITONES",
            help="Minimum spacing between peaks in semitones",
        )

    def execute(self, args: Namespace) -> int:
        """Execute peak extraction."""
        import numpy as np

        from intune.features import PeakExtractor

        if not self.validate_file_exists(args.input, "Spectrum file"):
            return 1

        config = self.load_config(args.config)
        if config is None:
            return 1

        try:
            config = self.apply_overrides(
                config,
                {
                    "peaks.height_cutoff": args.height_cutoff,
                    "peaks.minimum_note_distance": args.min_note_distance,
                },
            )
            points = np.loadtxt(args.input, delimiter=",", ndmin=2)
            peaks = PeakExtractor.from_config(config.peaks).process(points)
        except Exception as e:
            return self.error(f"Peak extraction failed: {e}")

        for peak in peaks:
            print(f"{peak.location:g},{peak.height:g}")
        return 0
