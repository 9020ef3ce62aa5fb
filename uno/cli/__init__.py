"""Command-line interface for the Uno engine."""
