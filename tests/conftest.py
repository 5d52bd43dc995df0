"""Shared fixtures and helpers for tests."""

from collections.abc import Callable
from pathlib import Path

import pytest
from java_sources import BASE_ENTITY_SOURCE, CUSTOMER_SOURCE, ORDER_SOURCE
from tree_sitter import Language, Parser
from tree_sitter_language_pack import get_language, get_parser

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
# Shared unit-test fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def java_parser() -> Parser:
    """Return a tree-sitter parser for Java."""
    return get_parser("java")


@pytest.fixture
def java_language() -> Language:
    """Return the tree-sitter Java language."""
    return get_language("java")


WriteJava = Callable[[str, str], Path]


@pytest.fixture
def project(tmp_path: Path) -> Path:
    """An empty Maven-style project root."""
    (tmp_path / "src" / "main" / "java").mkdir(parents=True)
    return tmp_path.resolve()


@pytest.fixture
def write_java(project: Path) -> WriteJava:
    """Write a source under ``src/main/java`` given its package path and source."""

    def _write(relative: str, source: str) -> Path:
        path = project / "src" / "main" / "java" / relative
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(source, encoding="utf-8")
        return path

    return _write


@pytest.fixture
def shop(write_java: WriteJava) -> dict[str, Path]:
    """Order and Customer entities plus a mapped superclass."""
    return {
        "order": write_java("com/shop/order/Order.java", ORDER_SOURCE),
        "customer": write_java("com/shop/customer/Customer.java", CUSTOMER_SOURCE),
        "base": write_java("com/shop/common/BaseEntity.java", BASE_ENTITY_SOURCE),
    }
