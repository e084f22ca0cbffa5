"""Entry point for running prtests as a module.

Usage:
    python -m prtests "$PR_BODY" runTests
    python -m prtests --json "$PR_BODY"
    python -m prtests --body-file pr_body.md runTests

Options (long forms only) must come before the PR body. Everything from the
first non-option argument on is positional, so a PR body starting with "-"
such as a Markdown bullet list or a "---" rule is read as text.
"""

from prtests.cli import run

if __name__ == "__main__":
    run()
