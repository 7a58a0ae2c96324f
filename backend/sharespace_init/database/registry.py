"""
Provisioning metadata.
Records in `_metadata` which schema version was last applied to the database.
"""
from datetime import datetime, timezone

from motor.motor_asyncio import AsyncIOMotorDatabase

from sharespace_init.database.databases import sharespace_db

PROVISIONING_ID = "provisioning"


async def record_provisioning(db: AsyncIOMotorDatabase, manifest: dict, index_count: int) -> None:
    """Upsert the provisioning record after a successful run."""
    now = datetime.now(timezone.utc)
    metadata_collection = db[sharespace_db.Collections.METADATA]
    await metadata_collection.update_one(
        {"_id": PROVISIONING_ID},
        {
            "$set": {
                "db_name": db.name,
                "purpose": manifest["purpose"],
                "collections": manifest["collections"],
                "schema_version": manifest["schema_version"],
                "index_count": index_count,
                "last_provisioned_at": now,
            },
            "$setOnInsert": {
                "created_at": now,
            },
        },
        upsert=True,
    )


async def get_provisioning_record(db: AsyncIOMotorDatabase) -> dict | None:
    """Get the provisioning record, None if the database was never provisioned."""
    return await db[sharespace_db.Collections.METADATA].find_one({"_id": PROVISIONING_ID})
