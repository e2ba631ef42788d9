"""
Exceptions for structural (setup-time) mistakes.

Ill-formed ranges are not errors: they produce empty grids. Everything here
means the search space itself was wired wrongly and continuing would only
produce meaningless models.
"""

from __future__ import annotations


class PiecefitError(Exception):
    """Base class for all piecefit wiring errors."""


class WiringError(PiecefitError):
    """A constrained segment is missing its left or right neighbour."""


class UnknownParameterError(PiecefitError, KeyError):
    """Name lookup did not match any named slot of the grid."""

    def __str__(self) -> str:
        return str(self.args[0]) if self.args else ""


class DuplicateParameterError(PiecefitError, ValueError):
    """Two slots of one grid carry the same name."""
