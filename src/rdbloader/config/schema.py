"""Pydantic models for the pipeline ``config.yml``.

Sections are declared leaves first; :class:`Config` is the root. Fields with
no default are required, ``X | None = None`` fields are optional.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Annotated, Any

from pydantic import Field, model_validator
from pydantic_core import PydanticCustomError

from .enums import CollectorFormat, LoggingLevel, OutputCompression, TrackerMethod
from .fields import (
    Amount,
    Count,
    Flag,
    NonEmptyStr,
    Section,
    StrMap,
    describe_kind,
    wire_enum,
)

# =============================================================================
# aws section
# =============================================================================


class Credentials(Section):
    """AWS access key pair."""

    access_key_id: NonEmptyStr
    secret_access_key: NonEmptyStr


class RawBucket(Section):
    """Collector output locations consumed by the enrich job."""

    in_: tuple[NonEmptyStr, ...] = Field(alias="in")
    processing: NonEmptyStr
    archive: NonEmptyStr


class EnrichedBucket(Section):
    """Enrich job output locations."""

    good: NonEmptyStr
    bad: NonEmptyStr
    errors: NonEmptyStr
    archive: NonEmptyStr


class ShreddedBucket(Section):
    """Shred job output, laid out like :class:`EnrichedBucket`."""

    good: NonEmptyStr
    bad: NonEmptyStr
    errors: NonEmptyStr
    archive: NonEmptyStr


class SnowplowBuckets(Section):
    """Object-storage paths, one per pipeline stage."""

    assets: NonEmptyStr
    jsonpath_assets: NonEmptyStr | None = None
    log: NonEmptyStr
    raw: RawBucket | None = None
    enriched: EnrichedBucket
    shredded: ShreddedBucket


class SnowplowS3(Section):
    region: NonEmptyStr
    buckets: SnowplowBuckets


class EmrSoftware(Section):
    """Optional EMR applications; ``None`` means not installed."""

    hbase: str | None = None
    lingual: str | None = None


class EmrJobflow(Section):
    """Instance groups of the EMR cluster."""

    master_instance_type: NonEmptyStr
    core_instance_count: Count
    core_instance_type: NonEmptyStr
    task_instance_count: Count
    task_instance_type: NonEmptyStr
    task_instance_bid: Amount


class SnowplowEmr(Section):
    """EMR cluster specification."""

    ami_version: NonEmptyStr
    region: NonEmptyStr
    jobflow_role: NonEmptyStr
    service_role: NonEmptyStr
    placement: str | None = None
    ec2_subnet_id: str | None = None
    ec2_key_name: NonEmptyStr
    bootstrap: tuple[str, ...]
    software: EmrSoftware
    jobflow: EmrJobflow
    bootstrap_failure_tries: Count
    additional_info: str | None = None


class SnowplowAws(Section):
    access_key_id: NonEmptyStr
    secret_access_key: NonEmptyStr
    s3: SnowplowS3
    emr: SnowplowEmr

    @property
    def credentials(self) -> Credentials:
        """The access key pair as a standalone record."""
        return Credentials(
            access_key_id=self.access_key_id,
            secret_access_key=self.secret_access_key,
        )


# =============================================================================
# collectors section
# =============================================================================


class Collectors(Section):
    format: Annotated[CollectorFormat, wire_enum(CollectorFormat)]

    @model_validator(mode="before")
    @classmethod
    def extract_format(cls, data: Any) -> Any:
        """View the section as a mapping and keep only its ``format`` value.

        A missing key then surfaces as ``collectors.format`` rather than as a
        generic error on the whole section.
        """
        if isinstance(data, cls):
            return data
        if not isinstance(data, Mapping):
            raise PydanticCustomError(
                "model_type", "Expected object, got {actual}", {"actual": describe_kind(data)}
            )
        if "format" not in data:
            return {}
        return {"format": data["format"]}


# =============================================================================
# enrich section
# =============================================================================


class EnrichVersions(Section):
    hadoop_enrich: NonEmptyStr
    hadoop_shred: NonEmptyStr
    hadoop_elasticsearch: NonEmptyStr


class Enrich(Section):
    job_name: NonEmptyStr
    versions: EnrichVersions
    continue_on_unexpected_error: Flag
    output_compression: Annotated[OutputCompression, wire_enum(OutputCompression)]


# =============================================================================
# storage section
# =============================================================================


class Download(Section):
    folder: str | None = None


class Storage(Section):
    download: Download = Field(default_factory=Download)


# =============================================================================
# monitoring section
# =============================================================================


class Logging(Section):
    level: Annotated[LoggingLevel, wire_enum(LoggingLevel)]


class SnowplowMonitoring(Section):
    method: Annotated[TrackerMethod, wire_enum(TrackerMethod)]
    app_id: NonEmptyStr
    collector: NonEmptyStr  # host:port

    def collector_address(self) -> tuple[str, int | None]:
        """Split ``collector`` into host and port (``None`` if no port given)."""
        host, sep, port = self.collector.rpartition(":")
        if not sep or not port.isdigit():
            return self.collector, None
        return host, int(port)


class Monitoring(Section):
    tags: StrMap
    logging: Logging
    snowplow: SnowplowMonitoring


# =============================================================================
# Root Configuration
# =============================================================================


class Config(Section):
    """Root of the pipeline ``config.yml``.

    Built once per run by :func:`rdbloader.config.decode_config` and never
    modified afterwards.
    """

    aws: SnowplowAws
    collectors: Collectors
    enrich: Enrich
    storage: Storage = Field(default_factory=Storage)
    monitoring: Monitoring

    def get_download_folder(self) -> str | None:
        """Local folder for downloaded shredded events, if configured."""
        return self.storage.download.folder

    def get_jsonpath_assets(self) -> str | None:
        """Bucket with custom JSONPath files, if configured."""
        return self.aws.s3.buckets.jsonpath_assets
