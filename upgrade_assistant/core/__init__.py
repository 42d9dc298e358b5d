"""Report rendering."""

from .reporter import StatusReporter

__all__ = ["StatusReporter"]
