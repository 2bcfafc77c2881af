"""Allow running btrfsctl with ``python -m btrfsctl``."""

from btrfsctl.cli.main import app

if __name__ == "__main__":
    app()
