"""Predict a repository's programming language from its description."""

__version__ = "0.1.0"
