"""Command line interface for sessmux."""
from .main import cli

__all__ = ["cli"]
