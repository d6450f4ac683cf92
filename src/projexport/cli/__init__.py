"""Command-line entry point for projexport."""
