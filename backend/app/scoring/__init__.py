"""Bowling scoring engine and score-sheet notation."""

from . import bowling, notation

__all__ = [
    "bowling",
    "notation",
]
