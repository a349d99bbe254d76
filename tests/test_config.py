"""Tests for narrator.config."""

from pathlib import Path

import pytest

from narrator.config import Config


@pytest.fixture()
def clean_env(monkeypatch):
    for name in (
        "ANTHROPIC_API_KEY",
        "NARRATOR_MODEL",
        "NARRATOR_SCENE_COUNT",
        "NARRATOR_SLOT_SECONDS",
        "NARRATOR_VARIANT_COUNT",
        "NARRATOR_WORKSPACE",
    ):
        monkeypatch.delenv(name, raising=False)
    return monkeypatch


class TestConfig:
    def test_defaults(self, clean_env):
        cfg = Config()
        assert cfg.scene_count == 15
        assert cfg.slot_seconds == 6.0
        assert cfg.variant_count == 3
        assert cfg.segmentation_settings().total_seconds == 90.0
        assert cfg.workspace == Path(".")

    def test_environment_overrides(self, clean_env, tmp_path):
        clean_env.setenv("NARRATOR_WORKSPACE", str(tmp_path))
        clean_env.setenv("NARRATOR_SCENE_COUNT", "10")
        clean_env.setenv("NARRATOR_SLOT_SECONDS", "4.5")
        clean_env.setenv("NARRATOR_MODEL", "claude-test")

        cfg = Config()
        settings = cfg.segmentation_settings()

        assert cfg.default_model == "claude-test"
        assert cfg.workspace == tmp_path
        assert (settings.scene_count, settings.slot_seconds) == (10, 4.5)

    def test_validate_required(self, clean_env):
        with pytest.raises(ValueError, match="ANTHROPIC_API_KEY"):
            Config().validate_required()
        Config(anthropic_api_key="sk-test").validate_required()

    def test_rejects_non_positive_scene_count(self, clean_env):
        clean_env.setenv("NARRATOR_SCENE_COUNT", "0")
        with pytest.raises(ValueError):
            Config()
