"""Integration tests against the real template repository.

Run with: RMKIT_NETWORK_TESTS=1 pytest tests/integration
"""

from __future__ import annotations

import os

import pytest

from rmkit.models.project import ProjectInfo
from rmkit.pipeline import PipelineState, ScaffoldPipeline
from rmkit.template.fetcher import TEMP_ARCHIVE_PREFIX

pytestmark = [
    pytest.mark.network,
    pytest.mark.skipif(
        not os.environ.get("RMKIT_NETWORK_TESTS"), reason="RMKIT_NETWORK_TESTS not set"
    ),
]


@pytest.mark.asyncio
async def test_scaffold_nrf52840(temp_dir, user_configs):
    project = ProjectInfo(project_name="net test", target_dir=temp_dir / "net_test", remote_folder="nrf52840")
    pipeline = ScaffoldPipeline()

    await pipeline.run(project, *user_configs)

    assert pipeline.state == PipelineState.DONE
    assert (project.target_dir / "keyboard.toml").exists()
    assert list(project.target_dir.glob(f"{TEMP_ARCHIVE_PREFIX}*.zip")) == []
