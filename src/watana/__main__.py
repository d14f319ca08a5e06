"""
Entry point for `python -m watana`.

Usage:
    python -m watana setup
    python -m watana folder get CARPETA-001
    python -m watana pdf sign document.pdf -o signed.pdf
"""

from .ui.cli import main

main()
