"""Command-line interface for TrapKit."""
