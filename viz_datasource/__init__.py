"""Datasource ingestion backend for the visualization platform."""

__version__ = "1.0.0"
