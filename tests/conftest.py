"""Shared fixtures for rdbloader test suite."""

from __future__ import annotations

from typing import Any

import pytest
import yaml


def make_document() -> dict[str, Any]:
    """Build a complete, valid config.yml document.

    Each call returns a fresh tree, so tests may mutate it freely.
    """
    return {
        "aws": {
            "access_key_id": "AKIAEXAMPLE",
            "secret_access_key": "s3cr3t",
            "s3": {
                "region": "us-east-1",
                "buckets": {
                    "assets": "s3://snowplow-hosted-assets",
                    "log": "s3://acme-pipeline/logs",
                    "enriched": {
                        "good": "s3://acme-pipeline/enriched/good",
                        "bad": "s3://acme-pipeline/enriched/bad",
                        "errors": "s3://acme-pipeline/enriched/errors",
                        "archive": "s3://acme-pipeline/enriched/archive",
                    },
                    "shredded": {
                        "good": "s3://acme-pipeline/shredded/good",
                        "bad": "s3://acme-pipeline/shredded/bad",
                        "errors": "s3://acme-pipeline/shredded/errors",
                        "archive": "s3://acme-pipeline/shredded/archive",
                    },
                },
            },
            "emr": {
                "ami_version": "5.5.0",
                "region": "us-east-1",
                "jobflow_role": "EMR_EC2_DefaultRole",
                "service_role": "EMR_DefaultRole",
                "ec2_key_name": "acme-key",
                "bootstrap": [],
                "software": {},
                "jobflow": {
                    "master_instance_type": "m1.medium",
                    "core_instance_count": 2,
                    "core_instance_type": "m1.medium",
                    "task_instance_count": 0,
                    "task_instance_type": "m1.medium",
                    "task_instance_bid": 0.015,
                },
                "bootstrap_failure_tries": 3,
            },
        },
        "collectors": {"format": "cloudfront"},
        "enrich": {
            "job_name": "Snowplow ETL",
            "versions": {
                "hadoop_enrich": "1.8.0",
                "hadoop_shred": "0.11.0",
                "hadoop_elasticsearch": "0.1.0",
            },
            "continue_on_unexpected_error": False,
            "output_compression": "GZIP",
        },
        "storage": {"download": {"folder": None}},
        "monitoring": {
            "tags": {},
            "logging": {"level": "INFO"},
            "snowplow": {
                "method": "post",
                "app_id": "snowplow",
                "collector": "collector.acme.com:80",
            },
        },
    }


@pytest.fixture
def document() -> dict[str, Any]:
    """A valid document that the test may modify."""
    return make_document()


@pytest.fixture
def write_config(tmp_path):
    """Write a document (or raw YAML text) to a file and return its path."""

    def _write(content: dict[str, Any] | str, name: str = "config.yml"):
        path = tmp_path / name
        if isinstance(content, str):
            path.write_text(content)
        else:
            path.write_text(yaml.safe_dump(content, sort_keys=False))
        return path

    return _write
