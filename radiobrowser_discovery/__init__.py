"""Discover the fastest reachable radio-browser API endpoint."""

__version__ = "0.1.0"
