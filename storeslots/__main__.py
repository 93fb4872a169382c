"""
Convenience entry point for running storeslots as a module.

Usage: python -m storeslots [command] [options]
"""

from .cli.app import app

if __name__ == "__main__":
    app()
