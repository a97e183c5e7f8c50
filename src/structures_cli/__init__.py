"""Structures CLI - converts Python entity declarations to Structures entity definitions.

Entity classes are converted to the Structures IDL by a pluggable, recursive
type conversion engine, and kept in sync with a remote Structures server.
"""

__version__ = "0.3.0"

from .config import Config

__all__ = ["Config"]
