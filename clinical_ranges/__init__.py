"""Clinical reference-range segment engine."""

__version__ = "0.1.0"
