"""Pytest configuration for rdbloader."""

# Prevent collection from source tree
collect_ignore = ["src"]
