"""Elasticsearch upgrade readiness checks."""

__version__ = "0.1.0"
