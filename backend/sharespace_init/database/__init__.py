"""
Database module - connection handling, collection definitions and index plan.
"""
from sharespace_init.database.connections import connect, close
from sharespace_init.database.databases import sharespace_db
from sharespace_init.database.specs import CollectionSpec, IndexSpec

__all__ = [
    "connect",
    "close",
    "sharespace_db",
    "CollectionSpec",
    "IndexSpec",
]
