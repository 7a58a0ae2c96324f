"""
Database definitions and collection constants.
"""
from sharespace_init.database.databases import sharespace_db

__all__ = ["sharespace_db"]
