"""Courier Gateway API: HTTP front for the courier database's stored routines."""

__version__ = "1.0.0"
