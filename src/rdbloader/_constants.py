"""Shared constants for rdbloader."""

# Config file picked up when no path is given on the command line
DEFAULT_CONFIG = "config.yml"

# Shown instead of secrets in CLI output
REDACTED = "********"
