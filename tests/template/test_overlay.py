"""Tests for copying user configs into the project."""

from __future__ import annotations

from pathlib import Path

import pytest

from rmkit.errors import ConfigCopyFailed
from rmkit.template.overlay import overlay


@pytest.fixture
def project_dir(temp_dir: Path) -> Path:
    path = temp_dir / "project"
    path.mkdir()
    (path / "keyboard.toml").write_text("# template default\n")
    return path


class TestOverlay:
    """Tests for overlay()."""

    def test_overwrites_template_files(self, project_dir, user_configs):
        keyboard_toml, vial_json = user_configs

        written = overlay(project_dir, keyboard_toml, vial_json)

        assert written == [project_dir / "keyboard.toml", project_dir / "vial.json"]
        assert (project_dir / "keyboard.toml").read_text() == keyboard_toml.read_text()
        assert (project_dir / "vial.json").read_text() == vial_json.read_text()

    def test_idempotent(self, project_dir, user_configs):
        keyboard_toml, vial_json = user_configs

        overlay(project_dir, keyboard_toml, vial_json)
        first = {p.name: p.read_bytes() for p in project_dir.iterdir()}
        overlay(project_dir, keyboard_toml, vial_json)
        second = {p.name: p.read_bytes() for p in project_dir.iterdir()}

        assert first == second

    def test_missing_source(self, project_dir, user_configs, temp_dir):
        keyboard_toml, _ = user_configs

        with pytest.raises(ConfigCopyFailed) as exc_info:
            overlay(project_dir, keyboard_toml, temp_dir / "missing.json")

        assert exc_info.value.which == "vial.json"
        assert isinstance(exc_info.value.cause, FileNotFoundError)

    def test_missing_target_dir(self, temp_dir, user_configs):
        keyboard_toml, vial_json = user_configs

        with pytest.raises(ConfigCopyFailed) as exc_info:
            overlay(temp_dir / "nowhere", keyboard_toml, vial_json)

        assert exc_info.value.which == "keyboard.toml"
