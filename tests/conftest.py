"""Shared fixtures and helpers for tests."""

from collections.abc import Callable
from pathlib import Path

import pytest
from tree_sitter import Parser
from tree_sitter_language_pack import get_parser

from c_lint.core.realign import STDIN_PATH

_REPO_ROOT = Path(__file__).parent.parent


# ---------------------------------------------------------------------------
# Auto-marker: tag tests as "unit" or "integration" based on directory
# ---------------------------------------------------------------------------


def pytest_collection_modifyitems(items: list[pytest.Item]) -> None:
    for item in items:
        test_path = Path(str(item.fspath))
        rel = test_path.relative_to(_REPO_ROOT / "tests")
        parts = rel.parts
        if parts and parts[0] == "integration":
            item.add_marker(pytest.mark.integration)
        else:
            item.add_marker(pytest.mark.unit)


# ---------------------------------------------------------------------------
# Preprocessor doubles
# ---------------------------------------------------------------------------


class PassThroughPreprocessor:
    """Pretends to preprocess by attributing the whole text to ``<stdin>``."""

    def __init__(self) -> None:
        self.calls: list[tuple[str, bool]] = []

    def expand(self, source_text: str, debug_mode: bool = False) -> str:
        self.calls.append((source_text, debug_mode))
        return f'# 1 "{STDIN_PATH}"\n{source_text}'


# ---------------------------------------------------------------------------
# Shared unit-test fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def c_parser() -> Parser:
    """Return a tree-sitter parser for C."""
    return get_parser("c")


@pytest.fixture
def write_source(tmp_path: Path) -> Callable[[str, str], Path]:
    """Write a file below ``tmp_path`` and return its resolved path."""

    def _write(name: str, content: str) -> Path:
        path = tmp_path / name
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content, encoding="utf-8")
        return path.resolve()

    return _write


@pytest.fixture
def pass_through() -> PassThroughPreprocessor:
    return PassThroughPreprocessor()
