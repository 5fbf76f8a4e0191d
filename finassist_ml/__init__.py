"""Categorization and retrieval core of the finance assistant."""

__version__ = "0.1.0"
