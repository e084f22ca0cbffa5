"""CLI interface for prtests."""

from __future__ import annotations

import json
import logging
import sys
from pathlib import Path
from typing import Annotated

import structlog
import typer

from prtests import __version__
from prtests.config import LoggingConfig, PrTestsConfig
from prtests.directive import extract_directive
from prtests.exceptions import MissingInputError, PrTestsError

logger = structlog.get_logger()

_LEVELS = {
    "debug": logging.DEBUG,
    "info": logging.INFO,
    "warning": logging.WARNING,
    "error": logging.ERROR,
}

app = typer.Typer(
    name="prtests",
    help="Print the Salesforce CLI test arguments requested by a PR description.",
    add_completion=False,
)

# Options that may precede the PR body; anything else starts the positionals
_VALUE_OPTIONS = frozenset({"--body-file", "--config"})
_FLAG_OPTIONS = frozenset({"--json", "--version", "--help"})


def configure_logging(config: LoggingConfig) -> None:
    """Configure structlog to write to stderr.

    Args:
        config: Logging configuration.
    """
    renderer = (
        structlog.processors.JSONRenderer()
        if config.renderer == "json"
        else structlog.dev.ConsoleRenderer()
    )
    structlog.configure(
        processors=[
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="%Y-%m-%d %H:%M:%S"),
            renderer,
        ],
        wrapper_class=structlog.make_filtering_bound_logger(_LEVELS[config.level]),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(file=sys.stderr),
        cache_logger_on_first_use=False,
    )


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        typer.echo(f"prtests version {__version__}")
        raise typer.Exit()


def read_body_file(source: str) -> str:
    """Read a PR body from a file path, or from stdin when source is "-".

    Raises:
        MissingInputError: If the file cannot be read.
    """
    if source == "-":
        return typer.get_text_stream("stdin", errors="replace").read()
    try:
        return Path(source).read_text(encoding="utf-8", errors="replace")
    except OSError as e:
        msg = f"Cannot read PR body file: {source} ({e.strerror or e})"
        raise MissingInputError(msg, source=source) from e


@app.command()
def main(
    pr_body: Annotated[
        str | None,
        typer.Argument(
            help="PR description to scan. Omit when using --body-file.",
            show_default=False,
        ),
    ] = None,
    mode: Annotated[
        str | None,
        typer.Argument(
            help="Output mode: 'runTests' prints --class-names, anything else prints --tests.",
            show_default=False,
        ),
    ] = None,
    body_file: Annotated[
        str | None,
        typer.Option(
            "--body-file",
            help="Read the PR description from a file ('-' for stdin). "
            "The single positional argument is then the mode.",
        ),
    ] = None,
    config: Annotated[
        Path | None,
        typer.Option(
            "--config",
            help="Path to prtests.yaml config file",
            exists=True,
            dir_okay=False,
            resolve_path=True,
        ),
    ] = None,
    json_output: Annotated[
        bool,
        typer.Option(
            "--json",
            help="Output the directive as JSON",
        ),
    ] = False,
    version: Annotated[
        bool | None,
        typer.Option(
            "--version",
            help="Show version and exit.",
            callback=version_callback,
            is_eager=True,
        ),
    ] = None,
) -> None:
    """Print the test arguments for a PR description.

    A "CI TESTS" block lists test classes to run, one per line. A
    "NO CI TESTS" marker skips tests. Anything else runs all local tests.
    """
    configure_logging(LoggingConfig())

    try:
        cfg = PrTestsConfig.discover(Path.cwd(), config)
        configure_logging(cfg.logging)
        log = logger.bind(command="main")

        if body_file is not None:
            # Positionals shift left: the only one allowed is the mode
            if mode is not None:
                msg = "Pass the PR body either positionally or with --body-file, not both"
                raise MissingInputError(msg, source="arguments")
            mode = pr_body
            text = read_body_file(body_file)
        else:
            text = pr_body

        if mode is None:
            mode = cfg.default_mode

        directive = extract_directive(text)
        log.info(
            "Extracted test directive",
            test_level=directive.level.value,
            tests=len(directive.tests),
            mode=mode,
        )

    except PrTestsError as e:
        logger.error("Failed to extract test directive", error=str(e))
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1) from e

    if json_output:
        typer.echo(json.dumps(directive.to_dict(mode)))
    else:
        typer.echo(directive.to_args(mode))


def guard_positionals(args: list[str]) -> list[str]:
    """Insert "--" before the first positional argument.

    PR bodies often start with "-" (bullet lists, "---" rules) and would
    otherwise be parsed as options. Options must come before the PR body.

    Args:
        args: Command-line arguments without the program name.

    Returns:
        The arguments with a "--" separator in front of the positionals.
    """
    index = 0
    while index < len(args):
        arg = args[index]
        if arg == "--":
            return list(args)
        name, has_value, _ = arg.partition("=")
        if name in _VALUE_OPTIONS:
            index += 1 if has_value else 2
        elif arg in _FLAG_OPTIONS:
            index += 1
        else:
            return [*args[:index], "--", *args[index:]]
    return list(args)


def run(argv: list[str] | None = None) -> None:
    """Console entry point for the prtests command."""
    args = sys.argv[1:] if argv is None else argv
    app(args=guard_positionals(args), prog_name="prtests")
