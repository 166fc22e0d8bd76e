"""
Structured configuration errors.

Every failure to read a configuration value ends up as a ConfigError,
which knows where in the document the problem is and why it happened.
"""
from __future__ import annotations

from enum import Enum
from typing import Optional


class ConfigErrorReason(str, Enum):
    """Machine-readable kind of a configuration failure."""
    MISSING = "missing"
    PARSE_FAILURE = "parse_failure"
    COMPUTE_FAILURE = "compute_failure"


class ConfigError(Exception):
    """
    Raised when the configuration is invalid.

    Attributes:
        path: Dotted location of the offending entry, relative to the document root
        reason: Kind of failure
        short_message: Description without the location, e.g. "Missing value"
        raw: The raw value that was rejected, if any
        cause: The lower-level error that triggered this one, if any
    """

    def __init__(
        self,
        path: str,
        reason: ConfigErrorReason,
        short_message: str,
        raw: Optional[str] = None,
        cause: Optional[BaseException] = None,
    ):
        super().__init__(f"Invalid configuration! {short_message}; location: {path}")
        self.path = path
        self.reason = reason
        self.short_message = short_message
        self.raw = raw
        self.cause = cause

    def describe(self) -> str:
        """One line suitable for showing to a configuration author."""
        line = f"{self.path}: {self.short_message}"
        if self.cause is not None:
            line += f" ({self.cause})"
        return line
