"""Models package for the application.

This module exports the shared model base used throughout the application.
"""

from __future__ import annotations

from .base import BaseModel

__all__ = [
    "BaseModel",
]
