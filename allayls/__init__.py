"""Allay Language Server: completions for Allay templates."""

__version__ = "0.1.0"
