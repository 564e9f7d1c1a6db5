"""Shared fixtures for building throwaway theme trees."""

from collections.abc import Callable
from pathlib import Path

import pytest

from asset_resolver.load_config import DEFAULT_CONFIG, load_config
from asset_resolver.resolution_memo import PROCESS_MEMO


@pytest.fixture
def write_tree() -> Callable[[Path, dict[str, str]], Path]:
    """Return a helper writing {relative path: content} below a root."""

    def _write(root: Path, files: dict[str, str]) -> Path:
        for rel, content in files.items():
            path = root / rel
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text(content, encoding="utf-8")
        return root

    return _write


@pytest.fixture
def config(monkeypatch: pytest.MonkeyPatch) -> dict:
    """Default configuration, isolated from the caller's environment."""
    monkeypatch.delenv("ASSET_RESOLVER_PHP_FILES", raising=False)
    monkeypatch.delenv("ASSET_RESOLVER_BUILD_FOLDER", raising=False)
    loaded = load_config(None)
    assert loaded == DEFAULT_CONFIG
    return loaded


@pytest.fixture(autouse=True)
def _clear_process_memo() -> None:
    """Keep the module-level memo from leaking between tests."""
    PROCESS_MEMO.clear()
