"""Command-line interface for transit-lab."""
