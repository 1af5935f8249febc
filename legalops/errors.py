"""
legalops.errors
===============

Exceptions raised by the compliance core and its repositories.
"""

from __future__ import annotations


class InvalidInput(ValueError):
    """Raised when the caller hands the core something it cannot evaluate."""


class EntityNotFound(KeyError):
    """Raised by a repository when no entity matches the requested id."""

    def __init__(self, entity_id: str) -> None:
        super().__init__(entity_id)
        self.entity_id = entity_id

    def __str__(self) -> str:
        return f"entity not found: {self.entity_id}"
