import sys
from pathlib import Path

import pytest


def pytest_configure(config):
    sys.path.insert(0, str(Path(__file__).parent / "src"))


@pytest.fixture
def isolated_env(monkeypatch, tmp_path):
    """Runs the test in an empty directory with no AUDITDIFF_ variables set."""
    for name in ("DELIMITER", "EMPTY_LABEL", "DATE_FORMAT", "CHECKED_LABEL", "UNCHECKED_LABEL", "ON_RENDER_ERROR"):
        monkeypatch.delenv(f"AUDITDIFF_{name}", raising=False)
    monkeypatch.chdir(tmp_path)
    return tmp_path


@pytest.fixture
def settings(isolated_env):
    """Returns DiffSettings loaded without any external overrides."""
    from src.auditdiff.config.settings import DiffSettings

    return DiffSettings.load()
