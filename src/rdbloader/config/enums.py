"""Closed wire-string enumerations used by the pipeline configuration.

Each enumeration maps its members one-to-one onto the canonical strings that
appear in ``config.yml``. Lookup is exact: no case folding, no trimming.
"""

from __future__ import annotations

from enum import Enum, unique


class UnknownEnumerationValue(ValueError):
    """Raised when a string matches no canonical value of an enumeration."""

    def __init__(self, enumeration: str, value: str):
        super().__init__(f"Unknown {enumeration} [{value}]")
        self.enumeration = enumeration
        self.value = value


class WireEnum(str, Enum):
    """Base for enumerations encoded as a single canonical string."""

    @property
    def as_string(self) -> str:
        """Canonical wire string of this member."""
        return self.value

    @classmethod
    def from_string(cls, value: str) -> WireEnum:
        """Return the member whose wire string is exactly ``value``.

        Raises:
            UnknownEnumerationValue: If no member matches.
        """
        for member in cls:
            if member.value == value:
                return member
        raise UnknownEnumerationValue(cls.__name__, value)

    @classmethod
    def wire_strings(cls) -> tuple[str, ...]:
        """All canonical strings, in declaration order."""
        return tuple(member.value for member in cls)


# =============================================================================
# Collector formats
# =============================================================================


@unique
class CollectorFormat(WireEnum):
    """Raw event format produced by the collector."""

    CLOUDFRONT = "cloudfront"
    CLOJURE_TOMCAT = "clj-tomcat"
    THRIFT = "thrift"
    CF_ACCESS_LOG = "tsv/com.amazon.aws.cloudfront/wd_access_log"
    URBAN_AIRSHIP_CONNECTOR = "ndjson/urbanairship.connect/v1"


# =============================================================================
# Enrich output
# =============================================================================


@unique
class OutputCompression(WireEnum):
    """Compression applied to enriched output files."""

    NONE = "NONE"
    GZIP = "GZIP"


# =============================================================================
# Monitoring
# =============================================================================


@unique
class LoggingLevel(WireEnum):
    """Verbosity of the loader's own logging."""

    DEBUG = "DEBUG"
    INFO = "INFO"


@unique
class TrackerMethod(WireEnum):
    """HTTP method the monitoring tracker uses to send events."""

    GET = "get"
    POST = "post"


WIRE_ENUMS: tuple[type[WireEnum], ...] = (
    CollectorFormat,
    OutputCompression,
    LoggingLevel,
    TrackerMethod,
)
