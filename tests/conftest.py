from __future__ import annotations

import logging
import os
import tempfile
from collections.abc import Generator, Iterator
from pathlib import Path

import pytest


@pytest.fixture(autouse=True)
def configure_test_logging() -> Generator[None, None, None]:
    """Configure structlog for the test environment.

    Runs for every test so log output goes to stderr at WARNING level and
    does not mix with test stdout.
    """
    from exprcache.logging import configure_logging

    configure_logging(level=logging.WARNING)
    yield


@pytest.fixture
def temp_dir() -> Iterator[Path]:
    """Create a temporary directory for test files.

    Also saves and restores the current working directory so tests that
    chdir() do not affect each other.
    """
    original_cwd = os.getcwd()
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)
    os.chdir(original_cwd)


@pytest.fixture
def clean_env(
    temp_dir: Path, monkeypatch: pytest.MonkeyPatch
) -> Generator[None, None, None]:
    """Remove EXPRCACHE_ environment variables and isolate the user config.

    HOME points at an empty temporary directory so a developer's
    ~/.config/exprcache/config.yaml cannot leak into configuration tests.
    """
    for key in list(os.environ.keys()):
        if key.startswith("EXPRCACHE_"):
            monkeypatch.delenv(key)
    home = temp_dir / "home"
    home.mkdir()
    monkeypatch.setenv("HOME", str(home))
    yield


@pytest.fixture
def sample_config_yaml() -> str:
    """Return sample exprcache.yaml content for testing."""
    return """
parser:
  max_expression_length: 512
  strip_template_wrapper: false
"""
