"""Mindora: skincare routine task list."""

__version__ = "0.1.0"
