"""Entry point for running wfdocs as a module.

Usage:
    python -m wfdocs [command] [options]

Example:
    python -m wfdocs generate --repo .
    python -m wfdocs check
"""

from wfdocs.cli import app

if __name__ == "__main__":
    app()
