"""Coatings: style sheet applications for wiki pages and templates."""

__version__ = "0.1.0"
