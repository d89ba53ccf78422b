"""Command-line interface for minifmt."""
