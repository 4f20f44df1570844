"""Tests for configuration schemas and the YAML loader."""

import pytest
import yaml

from intune.config import (
    DatabaseConfig,
    IntuneConfig,
    PeakConfig,
    load_config,
    load_yaml,
    save_config,
    substitute_params,
)


class TestSchema:
    """Tests for schema defaults and validation."""

    def test_defaults(self):
        config = IntuneConfig()
        assert config.database.chunk_size == 1024
        assert config.database.band_count == 256
        assert config.database.note_count == 88
        assert config.peaks.height_cutoff == 0.005
        assert config.peaks.minimum_note_distance == 0.5

    def test_invalid_values(self):
        with pytest.raises(ValueError):
            DatabaseConfig(chunk_size=0)
        with pytest.raises(ValueError):
            PeakConfig(minimum_note_distance=0.0)


class TestSubstitution:
    """Tests for ${param} substitution."""

    def test_runtime_params(self):
        raw = {"database": {"band_count": "${bands}"}, "tags": ["${bands}", "x"]}
        result = substitute_params(raw, {"bands": 512})
        assert result == {"database": {"band_count": 512}, "tags": [512, "x"]}

    def test_environment_fallback(self, monkeypatch):
        monkeypatch.setenv("INTUNE_NOTES", "61")
        assert substitute_params("${INTUNE_NOTES}", {}) == "61"

    def test_missing_param(self, monkeypatch):
        monkeypatch.delenv("INTUNE_UNSET", raising=False)
        with pytest.raises(ValueError, match="Missing parameter"):
            substitute_params("${INTUNE_UNSET}", {})


class TestLoader:
    """Tests for loading and saving YAML configuration."""

    def test_load(self, tmp_path):
        path = tmp_path / "config.yaml"
        path.write_text(
            "database:\n"
            "  chunk_size: 64\n"
            "  band_count: ${bands}\n"
            "peaks:\n"
            "  minimum_note_distance: 1.0\n"
        )

        config = load_config(path, runtime_params={"bands": 128})

        assert config.database.chunk_size == 64
        assert config.database.band_count == 128
        assert config.database.note_count == 88
        assert config.peaks.minimum_note_distance == 1.0

    def test_empty_file_uses_defaults(self, tmp_path):
        path = tmp_path / "empty.yaml"
        path.write_text("")
        assert load_config(path) == IntuneConfig()

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            load_yaml(tmp_path / "missing.yaml")

    def test_not_a_mapping(self, tmp_path):
        path = tmp_path / "list.yaml"
        path.write_text("- 1\n- 2\n")
        with pytest.raises(ValueError, match="YAML dict"):
            load_yaml(path)

    def test_validation_error(self, tmp_path):
        path = tmp_path / "bad.yaml"
        path.write_text("database:\n  band_count: -3\n")
        with pytest.raises(ValueError, match="validation failed"):
            load_config(path)

    def test_save_round_trip(self, tmp_path):
        config = IntuneConfig(database=DatabaseConfig(band_count=512))
        path = tmp_path / "nested" / "saved.yaml"

        save_config(config, path)

        assert yaml.safe_load(path.read_text())["database"]["band_count"] == 512
        assert load_config(path) == config
