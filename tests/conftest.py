"""Pytest configuration and shared fixtures."""

from __future__ import annotations

import tempfile
import zipfile
from pathlib import Path
from typing import Callable, Generator

import httpx
import pytest

ROOT = "rmk-template-main"


@pytest.fixture
def temp_dir() -> Generator[Path, None, None]:
    """Create a temporary directory for tests."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def make_archive(temp_dir: Path) -> Callable[[dict[str, bytes | None]], Path]:
    """Build a zip file from ``{entry name: content}``; None marks a directory."""

    def build(entries: dict[str, bytes | None], name: str = "template.zip") -> Path:
        path = temp_dir / name
        with zipfile.ZipFile(path, "w") as zf:
            for entry_name, content in entries.items():
                if content is None:
                    zf.writestr(entry_name.rstrip("/") + "/", b"")
                else:
                    zf.writestr(entry_name, content)
        return path

    return build


@pytest.fixture
def template_entries() -> dict[str, bytes | None]:
    """Entries of a small multi-variant template archive."""
    return {
        f"{ROOT}/": None,
        f"{ROOT}/README.md": b"# rmk-template\n",
        f"{ROOT}/nrf52840/": None,
        f"{ROOT}/nrf52840/keyboard.toml": b'[keyboard]\nname = "{{ project_name }}"\n',
        f"{ROOT}/nrf52840/Cargo.toml": b'[package]\nname = "{{ project_name }}"\n',
        f"{ROOT}/nrf52840/src/main.rs": b"#![no_std]\n#![no_main]\n",
        f"{ROOT}/nrf52840_split/keyboard.toml": b"[split]\n",
        f"{ROOT}/rp2040/keyboard.toml": b"[keyboard]\n",
    }


@pytest.fixture
def template_zip(make_archive, template_entries) -> bytes:
    """Raw bytes of the template archive."""
    return make_archive(template_entries).read_bytes()


@pytest.fixture
def mock_client_factory() -> Callable[..., httpx.AsyncClient]:
    """Create httpx clients that answer every request with a fixed response."""

    def factory(content: bytes = b"", status_code: int = 200) -> httpx.AsyncClient:
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(status_code, content=content)

        return httpx.AsyncClient(transport=httpx.MockTransport(handler))

    return factory


@pytest.fixture
def user_configs(temp_dir: Path) -> tuple[Path, Path]:
    """A user's keyboard.toml and vial.json outside the project directory."""
    config_dir = temp_dir / "user"
    config_dir.mkdir()
    keyboard_toml = config_dir / "keyboard.toml"
    keyboard_toml.write_text(
        '[keyboard]\nname = "{{ project_name }}"\nchip = "nrf52840"\n\n'
        "[matrix]\nrows = 4\n"
    )
    vial_json = config_dir / "vial.json"
    vial_json.write_text('{"name": "My Board", "matrix": {"rows": 4, "cols": 3}}')
    return keyboard_toml, vial_json


def pytest_configure(config):
    config.addinivalue_line("markers", "network: tests that download the real template")
