"""Relational database loader: pipeline configuration and tooling."""

__version__ = "0.13.0"
