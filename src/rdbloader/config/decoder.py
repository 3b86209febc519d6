"""Decode a generic document into a :class:`~rdbloader.config.schema.Config`.

The document is any in-memory tree of mappings, lists and scalars, as
produced by a YAML or JSON parser. Every section and field is attempted in a
single pass; all failures are reported together and no partially built
configuration is ever returned.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from typing import Any

from pydantic import ValidationError
from pydantic_core import ErrorDetails

from .errors import ConfigValidationError, DecodeErrorKind, DecodeFailure
from .fields import describe_kind
from .schema import Config

logger = logging.getLogger(__name__)

_INTEGER_ERRORS = frozenset({"int_parsing", "int_parsing_size", "int_from_float"})
_DECIMAL_ERRORS = frozenset({"decimal_parsing", "finite_number"})

# pydantic error type -> document kind the node should have been
_EXPECTED_KIND = {
    "string_type": "string",
    "string_unicode": "string",
    "int_type": "integer",
    "decimal_type": "decimal",
    "number_type": "number",
    "bool_type": "boolean",
    "bool_parsing": "boolean",
    "dict_type": "object",
    "model_type": "object",
    "model_attributes_type": "object",
    "list_type": "list",
    "tuple_type": "list",
}


def _section_name(loc: tuple[str | int, ...]) -> str:
    return ".".join(str(part) for part in loc) if loc else "<root>"


def _to_failure(error: ErrorDetails) -> DecodeFailure:
    """Convert one pydantic error into a :class:`DecodeFailure`."""
    error_type = error["type"]
    path = tuple(error["loc"])
    raw = error.get("input")

    if error_type == "missing":
        return DecodeFailure(
            kind=DecodeErrorKind.MISSING_FIELD,
            path=path,
            message=(
                f"Missing required field '{path[-1]}' in section '{_section_name(path[:-1])}'"
            ),
        )

    if error_type == "unknown_enumeration_value":
        ctx = error.get("ctx", {})
        return DecodeFailure(
            kind=DecodeErrorKind.UNKNOWN_ENUMERATION_VALUE,
            path=path,
            message=error["msg"],
            value=raw,
            expected=ctx.get("enumeration"),
        )

    if error_type in _INTEGER_ERRORS or error_type in _DECIMAL_ERRORS:
        expected = "integer" if error_type in _INTEGER_ERRORS else "decimal"
        return DecodeFailure(
            kind=DecodeErrorKind.NUMERIC_FORMAT_ERROR,
            path=path,
            message=f"Expected {expected}, got {raw!r}",
            value=raw,
            expected=expected,
        )

    if error_type == "string_too_short":
        return DecodeFailure(
            kind=DecodeErrorKind.INVALID_VALUE,
            path=path,
            message="Expected non-empty string, got empty string",
            value=raw,
            expected="string",
        )

    expected = _EXPECTED_KIND.get(error_type)
    if expected is None:
        message = error["msg"]
    else:
        message = f"Expected {expected}, got {describe_kind(raw)}"
    return DecodeFailure(
        kind=DecodeErrorKind.TYPE_MISMATCH,
        path=path,
        message=message,
        value=raw,
        expected=expected,
    )


def translate_errors(errors: Iterable[ErrorDetails]) -> list[DecodeFailure]:
    """Convert pydantic validation errors into decode failures, keeping order."""
    return [_to_failure(error) for error in errors]


def decode_config(document: Mapping[str, Any]) -> Config:
    """Decode a configuration document.

    Args:
        document: Parsed ``config.yml`` content

    Returns:
        Fully validated, immutable Config

    Raises:
        ConfigValidationError: If any field is missing or malformed. The
            exception's ``failures`` lists every problem found.
    """
    try:
        config = Config.model_validate(document)
    except ValidationError as e:
        failures = translate_errors(e.errors())
        logger.debug("Configuration rejected with %d failure(s)", len(failures))
        raise ConfigValidationError(failures) from None

    logger.debug(
        "Decoded configuration: collector format %s, job %s",
        config.collectors.format.as_string,
        config.enrich.job_name,
    )
    return config


def collect_failures(document: Mapping[str, Any]) -> list[DecodeFailure]:
    """Return every decode failure for ``document``; empty if it is valid."""
    try:
        decode_config(document)
    except ConfigValidationError as e:
        return list(e.failures)
    return []


def encode_config(config: Config) -> dict[str, Any]:
    """Re-encode a configuration as a plain document.

    Enumerations become their wire strings and the task bid a decimal string,
    so that ``decode_config(encode_config(config)) == config``.
    """
    return config.model_dump(mode="json", by_alias=True)
