"""Utility functions for the registry inspector."""

from .digest import validate_digest

__all__ = ["validate_digest"]
