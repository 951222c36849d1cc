"""Command-line interface for tardisremote."""
