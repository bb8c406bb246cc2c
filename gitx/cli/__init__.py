"""Command-line interface for gx."""
