"""Custom exceptions for prtests."""

from pathlib import Path


class PrTestsError(Exception):
    """Base exception for all prtests errors."""

    pass


class MissingInputError(PrTestsError):
    """Raised when no pull-request body was supplied."""

    def __init__(
        self,
        message: str,
        *,
        source: str = "",
    ) -> None:
        super().__init__(message)
        self.source = source


class ConfigError(PrTestsError):
    """Raised when configuration is invalid."""

    def __init__(
        self,
        message: str,
        *,
        config_path: Path | None = None,
        field: str = "",
    ) -> None:
        super().__init__(message)
        self.config_path = config_path
        self.field = field
