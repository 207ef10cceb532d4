"""Command-line interface for uno-groups."""
