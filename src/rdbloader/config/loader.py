"""Configuration loader for the relational database loader."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

import yaml

from .decoder import decode_config, encode_config
from .errors import ConfigFileNotFoundError, ConfigParseError
from .schema import Config

logger = logging.getLogger(__name__)


def load_yaml(path: Path) -> dict[str, Any]:
    """Load YAML file and return as dictionary.

    Args:
        path: Path to YAML file

    Returns:
        Dictionary containing parsed YAML

    Raises:
        ConfigFileNotFoundError: If file doesn't exist
        ConfigParseError: If the file cannot be read or decoded, YAML parsing
            fails, or the top level is not a mapping
    """
    if not path.exists():
        raise ConfigFileNotFoundError(f"Configuration file not found: {path}")
    if not path.is_file():
        raise ConfigFileNotFoundError(f"Configuration path is not a file: {path}")

    try:
        with open(path, encoding="utf-8") as f:
            content = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ConfigParseError(f"Failed to parse YAML: {e}")  # noqa: B904
    except UnicodeDecodeError as e:
        raise ConfigParseError(f"Failed to decode {path} as UTF-8: {e}")  # noqa: B904
    except OSError as e:
        raise ConfigParseError(f"Failed to read {path}: {e}")  # noqa: B904

    if content is None:
        return {}
    if not isinstance(content, dict):
        raise ConfigParseError(
            f"Expected a mapping at the top level of {path}, got {type(content).__name__}"
        )
    return content


def load_config(path: str | Path) -> Config:
    """Load and validate the pipeline configuration from file.

    Args:
        path: Path to configuration YAML file

    Returns:
        Validated Config object

    Raises:
        ConfigFileNotFoundError: If file doesn't exist
        ConfigParseError: If YAML parsing fails
        ConfigValidationError: If validation fails
    """
    path = Path(path)
    logger.debug("Loading configuration from %s", path)
    data = load_yaml(path)
    return decode_config(data)


def save_config(config: Config, path: str | Path) -> None:
    """Save configuration to YAML file.

    Args:
        config: Config object
        path: Path to save YAML file
    """
    path = Path(path)
    data = encode_config(config)

    with open(path, "w") as f:
        yaml.safe_dump(data, f, default_flow_style=False, sort_keys=False, indent=2)


def generate_example_config_yaml() -> str:
    """Generate example configuration YAML with comments.

    Only the AWS credentials are left blank; everything else holds a value
    that decodes as-is.

    Returns:
        String containing commented YAML configuration
    """
    return """# Relational Database Loader Configuration
# ========================================
# Keys are snake_case. Fields marked Optional may be left empty or removed.

aws:
  # REQUIRED: credentials used for S3 and EMR
  access_key_id: ""
  secret_access_key: ""
  s3:
    region: us-east-1
    buckets:
      assets: s3://snowplow-hosted-assets   # DO NOT CHANGE unless you are hosting the jarfiles etc yourself in your own bucket
      jsonpath_assets:                      # Optional: if you have defined your own JSON Schemas, add the s3:// path to your own JSON Path files in your own bucket here
      log: s3://my-bucket/logs
      # raw:                                # Optional: only needed when the enrich step runs
      #   in:
      #     - s3://my-bucket/raw/in
      #   processing: s3://my-bucket/raw/processing
      #   archive: s3://my-bucket/raw/archive
      enriched:
        good: s3://my-bucket/enriched/good        # e.g. s3://my-out-bucket/enriched/good
        bad: s3://my-bucket/enriched/bad          # e.g. s3://my-out-bucket/enriched/bad
        errors: s3://my-bucket/enriched/errors    # Only written to when continue_on_unexpected_error is true below
        archive: s3://my-bucket/enriched/archive  # Where to archive enriched events to, e.g. s3://my-archive-bucket/enriched
      shredded:
        good: s3://my-bucket/shredded/good
        bad: s3://my-bucket/shredded/bad
        errors: s3://my-bucket/shredded/errors
        archive: s3://my-bucket/shredded/archive
  emr:
    ami_version: 5.5.0
    region: us-east-1          # Always set this
    jobflow_role: EMR_EC2_DefaultRole  # Created using $ aws emr create-default-roles
    service_role: EMR_DefaultRole      # Created using $ aws emr create-default-roles
    placement:                 # Optional: set this if not running in VPC. Leave blank otherwise
    ec2_subnet_id:             # Optional: set this if running in VPC. Leave blank otherwise
    ec2_key_name: my-key
    bootstrap: []              # Set this to specify custom bootstrap actions. Leave empty otherwise
    software:
      hbase:                   # Optional. To launch on cluster, provide version, "0.92.0", keep quotes. Leave empty otherwise.
      lingual:                 # Optional. To launch on cluster, provide version, "1.1", keep quotes. Leave empty otherwise.
    # Adjust your Hadoop cluster below
    jobflow:
      master_instance_type: m1.medium
      core_instance_count: 2
      core_instance_type: m1.medium
      task_instance_count: 0   # Increase to use spot instances
      task_instance_type: m1.medium
      task_instance_bid: 0.015 # In USD. Only used when task_instance_count > 0
    bootstrap_failure_tries: 3 # Number of times to attempt the job in the event of bootstrap failures
    additional_info:           # Optional JSON string for selecting additional features

collectors:
  format: cloudfront  # cloudfront | clj-tomcat | thrift | tsv/com.amazon.aws.cloudfront/wd_access_log | ndjson/urbanairship.connect/v1

enrich:
  job_name: Snowplow ETL       # Give your job a name
  versions:
    hadoop_enrich: 1.8.0       # Version of the Hadoop Enrichment process
    hadoop_shred: 0.11.0       # Version of the Hadoop Shredding process
    hadoop_elasticsearch: 0.1.0 # Version of the Hadoop to Elasticsearch copying process
  continue_on_unexpected_error: false # Set to 'true' (and set :out_errors: above) if you don't want any exceptions thrown from ETL
  output_compression: NONE     # NONE | GZIP

storage:
  download:
    folder:                    # Optional: postgres-only config option. Where to store the downloaded files. Leave blank for Redshift

monitoring:
  tags: {}                     # Name-value pairs describing this job
  logging:
    level: DEBUG               # DEBUG | INFO
  snowplow:
    method: get                # get | post
    app_id: snowplow           # e.g. snowplow
    collector: d3rkrsqld9gmqf.cloudfront.net:80  # e.g. d3rkrsqld9gmqf.cloudfront.net
"""
