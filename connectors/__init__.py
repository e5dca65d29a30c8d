"""Data source connectors for the analytics engine."""
