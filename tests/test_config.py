"""Tests for importer settings and environment loading."""

from pathlib import Path

import pytest
from pydantic import ValidationError

from oggdude_importer.base import ConflictMode
from oggdude_importer.config import ALL_CATEGORIES, ImporterSettings, load_settings


ENV_VARS = (
    "OGGDUDE_DATA_DIR",
    "OGGDUDE_SYSTEM_ID",
    "OGGDUDE_WORLD_ID",
    "OGGDUDE_CONFLICT_MODE",
    "OGGDUDE_CATEGORIES",
)


@pytest.fixture
def clean_env(monkeypatch):
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    return monkeypatch


class TestImporterSettings:

    def test_defaults(self):
        settings = ImporterSettings()
        assert settings.system_id == "swes"
        assert settings.world_id == "world"
        assert settings.conflict_mode is ConflictMode.UPSERT
        assert settings.categories == list(ALL_CATEGORIES)

    def test_ids_are_stripped(self):
        settings = ImporterSettings(system_id=" swes/ ", world_id="/my-world")
        assert settings.system_id == "swes"
        assert settings.world_id == "my-world"

    def test_empty_id_rejected(self):
        with pytest.raises(ValidationError):
            ImporterSettings(world_id="  ")

    def test_categories_normalized(self):
        settings = ImporterSettings(categories=[" Armor", "GEAR", ""])
        assert settings.categories == ["armor", "gear"]

    def test_unknown_category_rejected(self):
        with pytest.raises(ValidationError) as exc_info:
            ImporterSettings(categories=["armor", "vehicle"])
        assert "vehicle" in str(exc_info.value)

    def test_conflict_mode_from_string(self):
        assert ImporterSettings(conflict_mode="append").conflict_mode is ConflictMode.APPEND


class TestLoadSettings:

    def test_defaults_without_environment(self, clean_env):
        settings = load_settings()
        assert settings.system_id == "swes"
        assert settings.conflict_mode is ConflictMode.UPSERT

    def test_environment_overrides(self, clean_env, tmp_path):
        clean_env.setenv("OGGDUDE_DATA_DIR", str(tmp_path))
        clean_env.setenv("OGGDUDE_SYSTEM_ID", "starwarsffg")
        clean_env.setenv("OGGDUDE_WORLD_ID", "campaign")
        clean_env.setenv("OGGDUDE_CONFLICT_MODE", "APPEND")
        clean_env.setenv("OGGDUDE_CATEGORIES", "weapon, gear")

        settings = load_settings()

        assert settings.data_dir == Path(tmp_path)
        assert settings.system_id == "starwarsffg"
        assert settings.world_id == "campaign"
        assert settings.conflict_mode is ConflictMode.APPEND
        assert settings.categories == ["weapon", "gear"]

    def test_invalid_conflict_mode(self, clean_env):
        clean_env.setenv("OGGDUDE_CONFLICT_MODE", "replace")
        with pytest.raises(ValidationError):
            load_settings()
