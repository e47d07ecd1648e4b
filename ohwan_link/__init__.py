"""Ohwan Link web application server."""

__version__ = "1.0.1"
