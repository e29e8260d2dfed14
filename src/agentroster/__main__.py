"""Entry point for ``python -m agentroster``."""

from agentroster.cli.main import cli

if __name__ == "__main__":
    cli()
