"""Résumé document → structured record extraction."""

__version__ = "0.1.0"
