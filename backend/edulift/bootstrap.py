#!/usr/bin/env python3
"""
EduLift users collection bootstrap.

Creates the users collection with schema validation (strict level, error
action) and its secondary indexes, then prints a summary and an example of
a valid user document. Safe to re-run: unchanged definitions are reported as
already applied, conflicting ones stop the run with an explicit error.

Usage:
    edulift-bootstrap
    python -m edulift.bootstrap

Environment Variables:
    MONGO_URI: MongoDB connection string
    MONGO_DB_NAME: Target database (default: edulift)
    USERS_COLLECTION: Collection name (default: users)
    UPDATE_EXISTING_VALIDATOR: Apply collMod when the validator differs (default: false)
    PRINT_EXAMPLE_DOCUMENT: Print a sample valid document (default: true)
    LOG_LEVEL: Logging level (default: INFO)
"""
import asyncio
import json
import logging
import sys

from pymongo.errors import PyMongoError

from edulift.config import Settings, get_settings
from edulift.core.exceptions import ProvisioningError
from edulift.database.connections import close_connections, get_database, ping
from edulift.database.databases import edulift_db
from edulift.database.provisioner import (
    ProvisionReport,
    StepStatus,
    describe_indexes,
    provision_users_collection,
)
from edulift.models.user import example_user

logger = logging.getLogger("edulift.bootstrap")

_STATUS_LABELS = {
    StepStatus.APPLIED: "created",
    StepStatus.ALREADY_APPLIED: "already in place",
    StepStatus.UPDATED: "updated",
}


def setup_logging(level: str) -> None:
    logging.basicConfig(
        level=getattr(logging, level.upper()),
        format="%(asctime)s | %(levelname)s | %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )


def log_report(report: ProvisionReport) -> None:
    """Log one status line per provisioning step."""
    for step in report.steps:
        logger.info(f"✓ {step.kind.capitalize()} '{step.name}': {_STATUS_LABELS[step.status]}")


def log_summary(indexes: dict[str, list]) -> None:
    """Log the index listing plus required and indexed fields."""
    users = edulift_db.Collections.USERS
    rule = edulift_db.Collections.VALIDATORS[users]
    specs = edulift_db.Collections.INDEXES[users]

    logger.info("Indexes on collection:")
    for name, keys in indexes.items():
        logger.info(f"  - {name}: {json.dumps(dict(keys))}")

    logger.info(
        f"Validation: level={rule.validation_level}, action={rule.validation_action}; "
        "only documents matching the schema are accepted"
    )
    logger.info(f"Required fields: {', '.join(rule.required_fields)}")

    indexed: dict[str, str] = {}
    for spec in specs:
        for field in spec.fields:
            if field not in indexed:
                indexed[field] = f"{field} (unique)" if spec.unique else field
    logger.info(f"Indexed fields: {', '.join(indexed.values())}")


def print_example_document() -> None:
    print("\nExample valid user document:")
    print(json.dumps(example_user().to_document(), indent=2, default=str))


async def run(settings: Settings) -> ProvisionReport:
    """Provision the users collection and log what was done."""
    await ping()
    db = await get_database(settings.mongo_db_name)
    logger.info(f"Provisioning '{settings.mongo_db_name}.{settings.users_collection}'")

    report = await provision_users_collection(
        db,
        name=settings.users_collection,
        update_existing=settings.update_existing_validator,
    )
    log_report(report)

    indexes = await describe_indexes(db[settings.users_collection])
    log_summary(indexes)

    if report.changed:
        logger.info("Users collection setup completed")
    else:
        logger.info("Users collection was already provisioned; nothing to do")

    if settings.print_example_document:
        print_example_document()

    return report


async def _main(settings: Settings) -> int:
    try:
        await run(settings)
    except ProvisioningError as e:
        if e.report is not None:
            log_report(e.report)
        logger.error(f"Provisioning stopped: {e.message}")
        if e.details:
            logger.error(f"Details: {e.details}")
        return 1
    except PyMongoError as e:
        logger.error(f"MongoDB error: {e}")
        return 1
    finally:
        await close_connections()
    return 0


def main() -> int:
    settings = get_settings()
    setup_logging(settings.log_level)
    return asyncio.run(_main(settings))


if __name__ == "__main__":
    sys.exit(main())
