"""Command-line interface for crimelog."""
