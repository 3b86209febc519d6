"""Exceptions and structured decode failures for configuration loading."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from enum import Enum
from typing import Any


class ConfigError(Exception):
    """Base exception for configuration errors."""

    pass


class ConfigFileNotFoundError(ConfigError):
    """Raised when configuration file is not found."""

    pass


class ConfigParseError(ConfigError):
    """Raised when configuration file cannot be parsed."""

    pass


class DecodeErrorKind(str, Enum):
    """Why a document node was rejected."""

    MISSING_FIELD = "MissingField"
    TYPE_MISMATCH = "TypeMismatch"
    UNKNOWN_ENUMERATION_VALUE = "UnknownEnumerationValue"
    NUMERIC_FORMAT_ERROR = "NumericFormatError"
    INVALID_VALUE = "InvalidValue"


@dataclass(frozen=True)
class DecodeFailure:
    """A single rejected node of the configuration document.

    Attributes:
        kind: Failure category.
        path: Keys (and list indices) from the document root to the node.
        message: What was expected and what was found.
        value: The offending raw value, when there is one.
        expected: Expected kind or enumeration name, when known.
    """

    kind: DecodeErrorKind
    path: tuple[str | int, ...]
    message: str
    value: Any = None
    expected: str | None = None

    @property
    def dotted_path(self) -> str:
        """Path rendered as ``aws.emr.bootstrap_failure_tries``."""
        if not self.path:
            return "<root>"
        return ".".join(str(part) for part in self.path)

    def __str__(self) -> str:
        return f"{self.dotted_path}: {self.message}"


class ConfigValidationError(ConfigError):
    """Raised when a document does not decode into a configuration.

    ``failures`` is never empty and lists every problem found in one pass.
    """

    def __init__(self, failures: Sequence[DecodeFailure]):
        if not failures:
            raise ValueError("ConfigValidationError requires at least one failure")
        self.failures = tuple(failures)
        super().__init__(
            "Configuration validation failed:\n"
            + "\n".join(f"  - {failure}" for failure in self.failures)
        )
