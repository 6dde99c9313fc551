"""Command-line interface for stlimport."""
