"""Entry point for ``python -m bundlecheck``."""

from bundlecheck.cli import app

if __name__ == "__main__":
    app()
