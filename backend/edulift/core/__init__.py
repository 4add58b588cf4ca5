"""
Core module - shared exceptions.
"""
from edulift.core.exceptions import (
    ProvisioningError,
    CollectionConflictError,
    IndexConflictError,
    IndexProvisioningError,
)

__all__ = [
    "ProvisioningError",
    "CollectionConflictError",
    "IndexConflictError",
    "IndexProvisioningError",
]
