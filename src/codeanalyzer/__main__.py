"""Entry point for running codeanalyzer as a module.

Usage:
    python -m codeanalyzer [command] [options]

Example:
    python -m codeanalyzer analyze app.js --lang en
    python -m codeanalyzer check
"""

from codeanalyzer.cli import app

if __name__ == "__main__":
    app()
