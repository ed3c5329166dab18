"""Persona Chat - conversations with AI character personas, in demo or live mode."""

__version__ = "0.1.0"
