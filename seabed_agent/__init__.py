"""Seabed agent — world model and drone policy for the seabed scan game."""

__version__ = "0.1.0"
