"""Incremental redraw planning for interactive data visualizations."""

__version__ = "0.1.0"
