"""Command-line entry point for the cursor list tools."""
