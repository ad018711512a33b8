"""Shared in-memory tables for the in-memory repositories.

Rows are keyed by surrogate ID, and the foreign-key rules of the relational
schema (cascade from vehicles, restrict from administrators) are applied by
the repositories that use this store.
"""
import copy
from collections import defaultdict
from typing import Dict

from app.domain.entities.administrator import Administrator
from app.domain.entities.rating import Rating
from app.domain.entities.vehicle import Vehicle


class InMemoryStore:
    """Arena of entities keyed by ID, one dict per table."""

    def __init__(self):
        self.vehicles: Dict[int, Vehicle] = {}
        self.administrators: Dict[int, Administrator] = {}
        self.ratings: Dict[int, Rating] = {}
        self._sequences: Dict[str, int] = defaultdict(int)

    def next_id(self, table: str) -> int:
        self._sequences[table] += 1
        return self._sequences[table]

    @staticmethod
    def snapshot(entity):
        """Copy an entity so callers never alias stored rows."""
        return copy.deepcopy(entity)
