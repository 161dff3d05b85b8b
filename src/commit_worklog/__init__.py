"""Turn a developer's commits into billable work-log entries."""

__version__ = "0.1.0"

__all__ = ["__version__"]
