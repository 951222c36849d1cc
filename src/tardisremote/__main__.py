"""Main entry point for tardisremote."""

from tardisremote.cli.main import cli

if __name__ == "__main__":
    cli()
