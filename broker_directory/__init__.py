"""Directory of insurance brokers: search and filter API."""

__version__ = "1.0.0"
