"""Entry point for running pagewright as a module.

Usage:
    python -m pagewright [command] [options]

Example:
    python -m pagewright build app --language en
    python -m pagewright fragments app --json
"""

from pagewright.cli import app

if __name__ == "__main__":
    app()
