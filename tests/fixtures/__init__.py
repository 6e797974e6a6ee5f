"""Test fixtures for chatstore tests.

This package provides:
- An in-memory MongoDB client, database and collection
- Builders for databases left behind by earlier revisions
"""

from .mock_mongo import MockCollection, MockDatabase, MockMongoClient, matches
from .legacy import LEGACY_COLLECTIONS, seed_legacy_database

__all__ = [
    "MockCollection",
    "MockDatabase",
    "MockMongoClient",
    "matches",
    "LEGACY_COLLECTIONS",
    "seed_legacy_database",
]
