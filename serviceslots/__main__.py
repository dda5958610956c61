"""
Convenience entry point for running serviceslots directly.

Usage: python -m serviceslots [command] [options]
"""

from .cli.app import app

if __name__ == "__main__":
    app()
