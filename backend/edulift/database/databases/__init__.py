"""
Database definitions and collection constants.
"""
from edulift.database.databases import edulift_db

__all__ = ["edulift_db"]
