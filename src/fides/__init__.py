"""Fides nearby-church discovery service."""

__version__ = "0.1.0"
