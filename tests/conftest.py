"""Pytest fixtures for prtests tests."""

from __future__ import annotations

import sys
from collections.abc import Iterator
from pathlib import Path

PROJECT_ROOT = Path(__file__).resolve().parents[1]
SRC_DIR = PROJECT_ROOT / "src"
if str(SRC_DIR) not in sys.path:
    sys.path.insert(0, str(SRC_DIR))

import pytest
import structlog


@pytest.fixture(autouse=True)
def reset_structlog() -> Iterator[None]:
    """Undo logging configuration done by the CLI between tests."""
    yield
    structlog.reset_defaults()


@pytest.fixture
def tmp_workdir(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Run the test from an empty directory so no prtests.yaml is picked up."""
    workdir = tmp_path / "work"
    workdir.mkdir()
    monkeypatch.chdir(workdir)
    return workdir


@pytest.fixture
def pr_body() -> str:
    """A realistic PR description requesting two test classes."""
    return (
        "## Summary\n"
        "Adds duplicate detection to the account trigger.\n"
        "\n"
        "[CI TESTS]\n"
        "AccountTriggerHandlerTest\n"
        "DuplicateRuleServiceTest\n"
        "[/CI TESTS]\n"
    )
