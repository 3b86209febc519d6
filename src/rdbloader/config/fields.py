"""Field-level decoding rules shared by every configuration section.

Document keys are snake_case. Model field names are run through
:func:`to_snake_case` to obtain the key each section reads, so a field named
``accessKeyId`` and one named ``access_key_id`` both read ``access_key_id``.
"""

from __future__ import annotations

import re
from collections.abc import Iterator, Mapping
from decimal import Decimal
from types import MappingProxyType
from typing import Annotated, Any

from pydantic import (
    AfterValidator,
    BaseModel,
    BeforeValidator,
    ConfigDict,
    Field,
    PlainSerializer,
    StringConstraints,
)
from pydantic_core import PydanticCustomError

from .enums import UnknownEnumerationValue, WireEnum

# "HTTPServer" -> "HTTP_Server"
_ACRONYM_BOUNDARY = re.compile(r"([A-Z]+)([A-Z][a-z])")
# "accessKey" -> "access_Key", "ec2Subnet" -> "ec2_Subnet"
_WORD_BOUNDARY = re.compile(r"([a-z0-9])([A-Z])")


def to_snake_case(name: str) -> str:
    """Convert a camelCase or PascalCase field name to its snake_case key.

    Rule, applied in order:

    1. split an upper-case run from a following capitalised word
       (``AMIVersion`` -> ``AMI_Version``);
    2. split a lower-case letter or digit from a following upper-case letter
       (``ec2SubnetId`` -> ``ec2_Subnet_Id``);
    3. lower-case everything.

    Names already in snake_case are returned unchanged.

    Examples:
        >>> to_snake_case("accessKeyId")
        'access_key_id'
        >>> to_snake_case("AMIVersion")
        'ami_version'
    """
    name = _ACRONYM_BOUNDARY.sub(r"\1_\2", name)
    name = _WORD_BOUNDARY.sub(r"\1_\2", name)
    return name.lower()


def describe_kind(value: Any) -> str:
    """Name the document kind of a raw value (``string``, ``list``, ...)."""
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "boolean"
    if isinstance(value, (int, float, Decimal)):
        return "number"
    if isinstance(value, str):
        return "string"
    if isinstance(value, (list, tuple)):
        return "list"
    if isinstance(value, dict):
        return "object"
    return type(value).__name__


def wire_enum(enum_cls: type[WireEnum]) -> BeforeValidator:
    """Build the document decoder for a wire-string enumeration.

    The node is read as a string first, then resolved with
    ``enum_cls.from_string``. Both failures are raised as pydantic errors so
    they carry the node's location.
    """

    def decode(value: Any) -> WireEnum:
        if not isinstance(value, str):
            raise PydanticCustomError(
                "string_type",
                "Expected string, got {actual}",
                {"actual": describe_kind(value)},
            )
        try:
            return enum_cls.from_string(value)
        except UnknownEnumerationValue as e:
            raise PydanticCustomError(
                "unknown_enumeration_value",
                "Unknown {enumeration} [{value}]",
                {"enumeration": e.enumeration, "value": e.value},
            ) from None

    return BeforeValidator(decode)


def _reject_boolean(value: Any) -> Any:
    # YAML "yes"/"true" load as bool, which is an int subclass
    if isinstance(value, bool):
        raise PydanticCustomError(
            "number_type", "Expected number, got {actual}", {"actual": "boolean"}
        )
    return value


def _require_boolean(value: Any) -> Any:
    # only YAML true/false; no "yes", "on", "1" or 1
    if not isinstance(value, bool):
        raise PydanticCustomError(
            "bool_type", "Expected boolean, got {actual}", {"actual": describe_kind(value)}
        )
    return value


class FrozenMap(Mapping[str, str]):
    """Read-only, hashable string mapping.

    Compares equal to any mapping with the same items.
    """

    __slots__ = ("_items", "_hash")

    def __init__(self, items: Mapping[str, str]) -> None:
        self._items = MappingProxyType(dict(items))
        self._hash: int | None = None

    def __getitem__(self, key: str) -> str:
        return self._items[key]

    def __iter__(self) -> Iterator[str]:
        return iter(self._items)

    def __len__(self) -> int:
        return len(self._items)

    def __hash__(self) -> int:
        if self._hash is None:
            self._hash = hash(frozenset(self._items.items()))
        return self._hash

    def __repr__(self) -> str:
        return f"FrozenMap({dict(self._items)!r})"


NonEmptyStr = Annotated[str, StringConstraints(min_length=1)]
Count = Annotated[int, BeforeValidator(_reject_boolean)]
Amount = Annotated[Decimal, Field(allow_inf_nan=False), BeforeValidator(_reject_boolean)]
Flag = Annotated[bool, BeforeValidator(_require_boolean)]
StrMap = Annotated[
    dict[str, str],
    AfterValidator(FrozenMap),
    PlainSerializer(dict, return_type=dict[str, str]),
]


class Section(BaseModel):
    """Base for every configuration record.

    Records are frozen once built. Keys the model does not know are ignored so
    that complete ``config.yml`` files, which carry sections owned by other
    pipeline stages, still decode.
    """

    model_config = ConfigDict(
        frozen=True,
        extra="ignore",
        alias_generator=to_snake_case,
    )
