# Sharelink Test Fixtures
# Pytest fixtures for sharelink tests

import logging
import tempfile
from collections.abc import Generator
from pathlib import Path

import pytest

from sharelink.logger import EVENT_LOGGER_NAME
from sharelink.reconcile.models import DesiredLink


@pytest.fixture
def temp_dir() -> Generator[Path, None, None]:
    """Create a temporary directory for tests."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def user_home(temp_dir: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Temporary $HOME so config files never touch the real one."""
    home = temp_dir / "user"
    home.mkdir()
    monkeypatch.setenv("HOME", str(home))
    monkeypatch.delenv("SHARELINK_CONFIG", raising=False)
    monkeypatch.delenv("SHARELINK_HOME", raising=False)
    monkeypatch.delenv("SHARELINK_ACCOUNT", raising=False)
    return home


@pytest.fixture
def home(temp_dir: Path) -> Path:
    """Account home directory (/home/acct)."""
    path = temp_dir / "home" / "acct"
    path.mkdir(parents=True)
    return path


@pytest.fixture
def shares(temp_dir: Path) -> Path:
    """Share root with folders W, X, Y, Z, each holding a file."""
    root = temp_dir / "share"
    for name in ("W", "X", "Y", "Z"):
        (root / name).mkdir(parents=True)
        (root / name / "content.txt").write_text(f"share {name}", encoding="utf-8")
    return root


@pytest.fixture
def link(home: Path, shares: Path):
    """Factory for DesiredLink(home/folder -> shares/name)."""

    def _make(folder: str, name: str) -> DesiredLink:
        return DesiredLink(link=home / folder, target=shares / name)

    return _make


@pytest.fixture(autouse=True)
def reset_event_logger() -> Generator[None, None, None]:
    """Undo handlers installed by configure_logging."""
    yield
    logger = logging.getLogger(EVENT_LOGGER_NAME)
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()
    logger.propagate = True
    logger.setLevel(logging.NOTSET)


@pytest.fixture
def event_codes(caplog: pytest.LogCaptureFixture):
    """Return a callable listing captured event codes, in order."""
    logger = logging.getLogger(EVENT_LOGGER_NAME)
    logger.propagate = True
    caplog.set_level(logging.DEBUG, logger=EVENT_LOGGER_NAME)

    def _codes() -> list[str]:
        return [getattr(r, "event_code", None) for r in caplog.records if r.name == EVENT_LOGGER_NAME]

    return _codes
