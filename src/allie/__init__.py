"""Allie - Artificial Language Learning & Interaction Engine relay server."""

__version__ = "1.0.0"
