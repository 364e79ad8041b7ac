"""
Engine Errors - Failure taxonomy shared by every rule engine.

Every error here signals a caller contract violation: the engine
never retries or degrades. Callers are expected to pre-validate with
the matching legality/enumeration function, or catch and report.
"""

from __future__ import annotations


class EngineError(Exception):
    """Base class for all engine failures."""


class IllegalMoveError(EngineError):
    """A move was applied while its legality predicate was false."""

    def __init__(self, reason: str):
        super().__init__(reason)
        self.reason = reason


class EmptySourceError(EngineError):
    """A draw-or-fail / pop-or-fail primitive hit an empty collection."""


class MalformedConstructionError(EngineError, ValueError):
    """A fixed-size structure was built from the wrong number of parts."""


class InitialRevealError(EngineError):
    """The initial reveal selection broke a count/bounds/duplicate/face-up rule."""

    def __init__(self, reason: str):
        super().__init__(reason)
        self.reason = reason


class OutOfBoundsError(EngineError, IndexError):
    """A grid position lies outside the grid."""


class PhaseError(EngineError):
    """A turn or phase transition is not allowed in the current phase."""
