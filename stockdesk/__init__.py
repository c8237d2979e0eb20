"""Inventory dashboard client state layer."""

__version__ = "0.1.0"
