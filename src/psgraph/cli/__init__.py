"""Command-line interface for psgraph."""
