"""Command-line interface for agentshelf."""
