"""
Database module - MongoDB connection, collection rules and provisioning.
"""
from edulift.database.connections import (
    get_mongo_client,
    close_connections,
    get_database,
    ping,
)
from edulift.database.databases import edulift_db
from edulift.database.provisioner import (
    ProvisionReport,
    StepStatus,
    provision,
    provision_users_collection,
    describe_indexes,
)

__all__ = [
    "get_mongo_client",
    "close_connections",
    "get_database",
    "ping",
    "edulift_db",
    "ProvisionReport",
    "StepStatus",
    "provision",
    "provision_users_collection",
    "describe_indexes",
]
