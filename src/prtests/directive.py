"""Test directive extraction from pull-request descriptions.

A PR description may carry one of two markers that steer which Salesforce
tests CI runs:

    [CI TESTS]
    AccountServiceTest
    ContactTriggerTest
    [/CI TESTS]

or ``[NO CI TESTS]``. Without either marker all local tests run.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

import structlog

from prtests.exceptions import MissingInputError

logger = structlog.get_logger()

RUN_TESTS_MODE = "runTests"

_SPECIFIED_TESTS_RE = re.compile(r"\[CI TESTS\](.*?)\[/CI TESTS\]", re.DOTALL | re.IGNORECASE)
_NO_TESTS_RE = re.compile(r"\[NO CI TESTS\]", re.IGNORECASE)
_LINE_ENDING_RE = re.compile(r"\r\n?")


class TestLevel(str, Enum):
    """Test levels understood by the Salesforce CLI."""

    RUN_SPECIFIED_TESTS = "RunSpecifiedTests"
    NO_TEST_RUN = "NoTestRun"
    RUN_LOCAL_TESTS = "RunLocalTests"


@dataclass
class Directive:
    """The test selection decided for one PR description.

    Attributes:
        level: Which tests to run.
        tests: Test class names, only populated for RUN_SPECIFIED_TESTS.
    """

    level: TestLevel
    tests: list[str] = field(default_factory=list)

    def to_args(self, mode: str = "") -> str:
        """Render the directive as a CLI argument fragment.

        Args:
            mode: ``runTests`` selects ``--class-names``, anything else
                selects repeated ``--tests`` flags.

        Returns:
            The argument fragment, e.g. ``--test-level NoTestRun``.
        """
        args = f"--test-level {self.level.value}"
        if self.level is not TestLevel.RUN_SPECIFIED_TESTS:
            return args
        if mode == RUN_TESTS_MODE:
            return f"{args} --class-names {','.join(self.tests)}"
        return f"{args} --tests {' --tests '.join(self.tests)}"

    def to_dict(self, mode: str = "") -> dict[str, Any]:
        """Convert to a JSON-serializable dictionary."""
        return {
            "test_level": self.level.value,
            "tests": list(self.tests),
            "args": self.to_args(mode),
        }


def _split_test_names(block: str) -> list[str]:
    lines = _LINE_ENDING_RE.sub("\n", block).split("\n")
    return [name for name in (line.strip() for line in lines) if name]


def extract_directive(text: str | None) -> Directive:
    """Extract the test directive from a PR description.

    The first ``[CI TESTS]...[/CI TESTS]`` block wins over ``[NO CI TESTS]``;
    both markers are matched case-insensitively.

    Args:
        text: The PR description. May be empty.

    Returns:
        The extracted Directive.

    Raises:
        MissingInputError: If text is None.
    """
    if text is None:
        msg = "PR body is required (pass an empty string for an empty description)"
        raise MissingInputError(msg, source="text")

    match = _SPECIFIED_TESTS_RE.search(text)
    if match:
        tests = _split_test_names(match.group(1))
        logger.debug("Found CI TESTS block", test_count=len(tests))
        return Directive(level=TestLevel.RUN_SPECIFIED_TESTS, tests=tests)

    if _NO_TESTS_RE.search(text):
        logger.debug("Found NO CI TESTS marker")
        return Directive(level=TestLevel.NO_TEST_RUN)

    logger.debug("No test markers found, defaulting to local tests")
    return Directive(level=TestLevel.RUN_LOCAL_TESTS)


def get_test_config(text: str | None, mode: str = "") -> str:
    """Extract and render the test directive in one step.

    Example:
        >>> get_test_config("[CI TESTS]\\nFooTest\\nBarTest\\n[/CI TESTS]", "runTests")
        '--test-level RunSpecifiedTests --class-names FooTest,BarTest'
        >>> get_test_config("", "runTests")
        '--test-level RunLocalTests'
    """
    return extract_directive(text).to_args(mode)
