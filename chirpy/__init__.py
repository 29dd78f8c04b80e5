"""Chirpy - a small social-posting API."""

__version__ = "0.1.0"
