"""Pipeline configuration module."""

from .decoder import collect_failures, decode_config, encode_config, translate_errors
from .enums import (
    CollectorFormat,
    LoggingLevel,
    OutputCompression,
    TrackerMethod,
    UnknownEnumerationValue,
    WireEnum,
)
from .errors import (
    ConfigError,
    ConfigFileNotFoundError,
    ConfigParseError,
    ConfigValidationError,
    DecodeErrorKind,
    DecodeFailure,
)
from .fields import to_snake_case
from .loader import generate_example_config_yaml, load_config, load_yaml, save_config
from .schema import (
    Collectors,
    Config,
    Credentials,
    Download,
    EmrJobflow,
    EmrSoftware,
    Enrich,
    EnrichedBucket,
    EnrichVersions,
    Logging,
    Monitoring,
    RawBucket,
    ShreddedBucket,
    SnowplowAws,
    SnowplowBuckets,
    SnowplowEmr,
    SnowplowMonitoring,
    SnowplowS3,
    Storage,
)

__all__ = [
    # Config classes
    "Config",
    "SnowplowAws",
    "Credentials",
    "SnowplowS3",
    "SnowplowBuckets",
    "RawBucket",
    "EnrichedBucket",
    "ShreddedBucket",
    "SnowplowEmr",
    "EmrSoftware",
    "EmrJobflow",
    "Collectors",
    "Enrich",
    "EnrichVersions",
    "Storage",
    "Download",
    "Monitoring",
    "Logging",
    "SnowplowMonitoring",
    # Enums
    "WireEnum",
    "CollectorFormat",
    "OutputCompression",
    "LoggingLevel",
    "TrackerMethod",
    # Decoding
    "decode_config",
    "collect_failures",
    "encode_config",
    "translate_errors",
    "to_snake_case",
    # Loader functions
    "load_yaml",
    "load_config",
    "save_config",
    "generate_example_config_yaml",
    # Exceptions
    "ConfigError",
    "ConfigFileNotFoundError",
    "ConfigParseError",
    "ConfigValidationError",
    "DecodeErrorKind",
    "DecodeFailure",
    "UnknownEnumerationValue",
]
