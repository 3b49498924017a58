from __future__ import annotations

from pathlib import Path
import sys


import pytest


# Ensure the repository root (parent of ./tests) is importable during pytest collection.
# This avoids ModuleNotFoundError for `import confdoc` under pytest import modes
# that don't automatically prepend the cwd/rootdir to sys.path.
REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))


@pytest.fixture(autouse=True)
def clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("CONFDOC_INDENT", raising=False)
    monkeypatch.delenv("CONFDOC_ENCODING", raising=False)


@pytest.fixture
def config_dir(tmp_path: Path) -> Path:
    """
    A not-yet-existing config folder, so tests also cover directory creation.
    """
    return tmp_path / "conf" / "nested"


@pytest.fixture
def fake_home(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> Path:
    """
    Redirect home-directory lookup to a temp folder so tests never touch the real ~.
    """
    import confdoc.paths as paths

    home = tmp_path / "home"
    home.mkdir()

    def _home_dir() -> Path:
        return home

    monkeypatch.setattr(paths, "home_dir", _home_dir)
    return home


@pytest.fixture
def doc(config_dir: Path):
    from confdoc import Document

    with Document.open(config_dir, "conftest.json") as d:
        yield d
