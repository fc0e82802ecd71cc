from __future__ import annotations

import sys
from pathlib import Path

import pytest
from loguru import logger

from company_dedup.config.settings import Settings


@pytest.fixture(autouse=True)
def _reset_loguru():
    """CLI invocations reconfigure loguru against captured streams."""

    yield
    logger.remove()
    logger.configure(extra={"run_id": "-", "module": "-"})
    logger.add(sys.stderr, level="WARNING")


@pytest.fixture
def settings(tmp_path: Path) -> Settings:
    config_dir = tmp_path / "config"
    config_dir.mkdir()
    return Settings(config_dir=config_dir, environment="testing")
