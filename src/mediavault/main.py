"""Entry point for MediaVault.

Examples:
  mediavault import ~/Pictures/export --delete-originals
  mediavault list --sort date-newest
  python -m mediavault stats
"""

from mediavault.core.config import setup_logging


def main():
    """Configure logging and hand over to the CLI."""
    setup_logging()

    from mediavault.interfaces.cli.app import run_cli

    run_cli()


if __name__ == "__main__":
    main()
