"""Domain exceptions."""

from __future__ import annotations


class NeoarchError(Exception):
    """Base class for all neoarch errors."""


class DuplicateElementError(NeoarchError):
    """An element with the same full ID already exists in the design."""

    def __init__(self, full_id: str) -> None:
        super().__init__(f"Element already declared: {full_id}")
        self.full_id = full_id


class DesignLoadError(NeoarchError):
    """A design target could not be imported or did not produce a Design."""
