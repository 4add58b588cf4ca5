"""
Exceptions raised while provisioning the EduLift database.

Write-time errors (schema validation failures, duplicate emails) come straight
from the storage engine and are not wrapped here.
"""
from typing import TYPE_CHECKING, Any, Optional

if TYPE_CHECKING:
    from edulift.database.provisioner import ProvisionReport


class ProvisioningError(Exception):
    """Base exception for all provisioning failures."""

    def __init__(
        self,
        message: str,
        details: Optional[dict[str, Any]] = None,
        report: Optional["ProvisionReport"] = None,
    ):
        """
        Initialize the exception.

        Args:
            message: Human-readable error message
            details: Additional error details
            report: Steps applied before the failure, if any
        """
        super().__init__(message)
        self.message = message
        self.details = details or {}
        self.report = report


class CollectionConflictError(ProvisioningError):
    """Collection exists with a validator that differs from the declared one."""


class IndexConflictError(ProvisioningError):
    """
    Raised when a declared index clashes with an existing one.

    Either the name is taken by a different key spec/options, or the key spec
    is already indexed under another name.
    """


class IndexProvisioningError(ProvisioningError):
    """The storage engine refused to create an index."""
