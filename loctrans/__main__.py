"""
Entry point for running LocTrans as a module.

Usage:
    python -m loctrans --help
    python -m loctrans translate --pattern "./translations/*.json" --langs en,es
    python -m loctrans check
    python -m loctrans test --text "Bonjour"
"""
from .cli import app


if __name__ == "__main__":
    app()
