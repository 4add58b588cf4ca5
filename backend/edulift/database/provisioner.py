"""
Collection and index provisioning.

Applies a ValidationRule and a list of IndexSpecs to a database, one step at
a time. Each step either applies its definition, finds it already in place,
or raises a ProvisioningError. Nothing is retried or rolled back: steps
applied before a failure stay applied, and the partial report travels on the
exception.
"""
import logging
from enum import Enum
from typing import Any, Literal, Optional

from motor.motor_asyncio import AsyncIOMotorCollection, AsyncIOMotorDatabase
from pydantic import BaseModel, Field
from pymongo.errors import CollectionInvalid, PyMongoError

from edulift.core.exceptions import (
    CollectionConflictError,
    IndexConflictError,
    IndexProvisioningError,
    ProvisioningError,
)
from edulift.database.databases import edulift_db
from edulift.database.rules import IndexSpec, ValidationRule

logger = logging.getLogger(__name__)


class StepStatus(str, Enum):
    """Outcome of a single provisioning step."""
    APPLIED = "applied"
    ALREADY_APPLIED = "already_applied"
    UPDATED = "updated"


class StepResult(BaseModel):
    """One line of a provisioning report."""
    kind: Literal["collection", "index"]
    name: str
    status: StepStatus


class ProvisionReport(BaseModel):
    """Ordered results for a collection and its indexes."""
    collection: str
    steps: list[StepResult] = Field(default_factory=list)

    @property
    def changed(self) -> bool:
        return any(step.status != StepStatus.ALREADY_APPLIED for step in self.steps)

    def record(self, kind: str, name: str, status: StepStatus) -> StepResult:
        step = StepResult(kind=kind, name=name, status=status)
        self.steps.append(step)
        return step


def _same_validation(current: dict[str, Any], declared: dict[str, Any]) -> bool:
    # MongoDB reports level/action only when set; absent means the defaults
    return (
        current.get("validator") == declared["validator"]
        and current.get("validationLevel", "strict") == declared["validationLevel"]
        and current.get("validationAction", "error") == declared["validationAction"]
    )


async def provision_collection(
    db: AsyncIOMotorDatabase,
    name: str,
    rule: ValidationRule,
    update_existing: bool = False,
) -> StepStatus:
    """
    Create a collection with its validator attached.

    Args:
        db: Target database
        name: Collection name
        rule: Validator to attach
        update_existing: Replace a differing validator with collMod instead
            of failing

    Returns:
        APPLIED, ALREADY_APPLIED or UPDATED

    Raises:
        CollectionConflictError: Collection exists with different validation
            options (and update_existing is False), or appeared mid-run
    """
    options = rule.collection_options()

    if name not in await db.list_collection_names():
        try:
            await db.create_collection(name, **options)
        except CollectionInvalid as e:
            raise CollectionConflictError(
                f"Collection '{name}' was created by another process",
                details={"collection": name},
            ) from e
        logger.info(f"Created collection '{name}' with schema validation")
        return StepStatus.APPLIED

    current = await db[name].options()
    if _same_validation(current, options):
        logger.debug(f"Collection '{name}' already has the declared validator")
        return StepStatus.ALREADY_APPLIED

    if not update_existing:
        raise CollectionConflictError(
            f"Collection '{name}' already exists with different validation options",
            details={
                "collection": name,
                "validationLevel": current.get("validationLevel"),
                "validationAction": current.get("validationAction"),
                "has_validator": "validator" in current,
            },
        )

    await db.command("collMod", name, **options)
    logger.info(f"Updated validator on existing collection '{name}'")
    return StepStatus.UPDATED


async def provision_index(
    collection: AsyncIOMotorCollection,
    spec: IndexSpec,
) -> StepStatus:
    """
    Create a single named index unless an identical one exists.

    Raises:
        IndexConflictError: Name or key spec clashes with an existing index
        IndexProvisioningError: The server refused to build the index
    """
    existing = await collection.index_information()

    current = existing.get(spec.name)
    if current is not None:
        if spec.same_keys(current["key"]) and spec.same_options(current):
            logger.debug(f"Index '{spec.name}' already exists")
            return StepStatus.ALREADY_APPLIED
        raise IndexConflictError(
            f"Index '{spec.name}' already exists with different keys or options",
            details={"index": spec.name, "existing": current, "declared": spec.model_dump()},
        )

    for other_name, info in existing.items():
        if spec.same_keys(info["key"]):
            raise IndexConflictError(
                f"Keys of index '{spec.name}' are already indexed as '{other_name}'",
                details={"index": spec.name, "existing_name": other_name, "keys": spec.keys},
            )

    try:
        await collection.create_index(spec.keys, **spec.create_kwargs())
    except PyMongoError as e:
        raise IndexProvisioningError(
            f"Failed to create index '{spec.name}': {e}",
            details={"index": spec.name},
        ) from e

    logger.info(f"Created index '{spec.name}' on {spec.fields}")
    return StepStatus.APPLIED


async def provision(
    db: AsyncIOMotorDatabase,
    name: str,
    rule: ValidationRule,
    indexes: list[IndexSpec],
    update_existing: bool = False,
) -> ProvisionReport:
    """
    Provision a validated collection and its indexes, strictly in order.

    Returns:
        ProvisionReport with one collection step followed by one step per index

    Raises:
        ProvisioningError: First failing step; its report holds the steps
            applied before it. Driver errors are re-raised as a plain
            ProvisioningError chained to the original
    """
    report = ProvisionReport(collection=name)
    try:
        status = await provision_collection(db, name, rule, update_existing=update_existing)
        report.record("collection", name, status)

        collection = db[name]
        for spec in indexes:
            status = await provision_index(collection, spec)
            report.record("index", spec.name, status)
    except ProvisioningError as e:
        e.report = report
        raise
    except PyMongoError as e:
        raise ProvisioningError(
            f"MongoDB error while provisioning '{name}': {e}",
            details={"collection": name, "completed_steps": len(report.steps)},
            report=report,
        ) from e

    return report


async def provision_users_collection(
    db: AsyncIOMotorDatabase,
    name: Optional[str] = None,
    update_existing: bool = False,
) -> ProvisionReport:
    """Provision the users collection with its declared validator and indexes."""
    users = edulift_db.Collections.USERS
    return await provision(
        db,
        name or users,
        edulift_db.Collections.VALIDATORS[users],
        edulift_db.Collections.INDEXES[users],
        update_existing=update_existing,
    )


async def describe_indexes(collection: AsyncIOMotorCollection) -> dict[str, list]:
    """Map each index name on the collection to its key spec."""
    info = await collection.index_information()
    return {index_name: list(details["key"]) for index_name, details in info.items()}
