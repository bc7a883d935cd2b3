"""Errors raised by the motif search."""

from __future__ import annotations

from typing import Any


class MotifSearchError(Exception):
    """Base class for fatal search failures.

    Every error carries a short machine-readable ``code`` and a ``details`` dict
    with the context needed to diagnose it. Search errors abort the whole search:
    no partial result is ever returned alongside one.
    """

    code = "motif_search_error"

    def __init__(self, message: str, **details: Any) -> None:
        super().__init__(message)
        self.message = message
        self.details: dict[str, Any] = dict(details)

    def __str__(self) -> str:
        if not self.details:
            return f"[{self.code}] {self.message}"
        ctx = ", ".join(f"{k}={v!r}" for k, v in sorted(self.details.items()))
        return f"[{self.code}] {self.message} ({ctx})"


class DisconnectedMotifError(MotifSearchError):
    """The motif has more than one (weakly) connected component."""

    code = "disconnected_motif"


class InvariantViolationError(MotifSearchError):
    """A complete candidate mapping is missing one of its motif nodes."""

    code = "invariant_violation"


class SearchCancelled(MotifSearchError):
    """The caller cancelled the search or its time budget ran out."""

    code = "search_cancelled"


__all__ = [
    "MotifSearchError",
    "DisconnectedMotifError",
    "InvariantViolationError",
    "SearchCancelled",
]
