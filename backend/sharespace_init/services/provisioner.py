"""
ShareSpace database provisioner.

Applies the declarative collection and index plan to a target database:
1. Application principal (create if absent, otherwise re-grant its role)
2. Collections with `$jsonSchema` validators
3. Secondary indexes

Each step is safe to re-run. By default pre-existing resources are
reconciled and logged; with `strict=True` they raise DuplicateResourceError.
The first failing step aborts the run.
"""
import logging
from dataclasses import dataclass, field
from typing import Optional

from motor.motor_asyncio import AsyncIOMotorClient, AsyncIOMotorCollection, AsyncIOMotorDatabase
from pymongo.errors import CollectionInvalid, ConnectionFailure, OperationFailure, PyMongoError

from sharespace_init.core.errors import ConnectivityError, DuplicateResourceError, ProvisioningError
from sharespace_init.database.databases import sharespace_db
from sharespace_init.database.registry import record_provisioning
from sharespace_init.database.specs import CollectionSpec, IndexSpec

logger = logging.getLogger("sharespace_init")

# Server error codes
USER_ALREADY_EXISTS = 51003
INDEX_OPTIONS_CONFLICT = 85
INDEX_KEY_SPECS_CONFLICT = 86


@dataclass(frozen=True)
class AppCredentials:
    """Application principal with a single role on a single database."""
    username: str
    password: str = field(repr=False)
    database: str
    role: str = "readWrite"

    @property
    def roles(self) -> list[dict]:
        return [{"role": self.role, "db": self.database}]


@dataclass
class ProvisionConfig:
    """Everything a provisioning run needs; no ambient database state."""
    client: AsyncIOMotorClient
    db_name: str
    credentials: AppCredentials
    strict: bool = False
    collections: list[CollectionSpec] = field(default_factory=lambda: list(sharespace_db.COLLECTION_SPECS))
    indexes: list[IndexSpec] = field(default_factory=lambda: list(sharespace_db.INDEX_PLAN))
    manifest: dict = field(default_factory=lambda: dict(sharespace_db.DB_MANIFEST))


@dataclass
class ProvisionReport:
    """Outcome of a provisioning run."""
    db_name: str
    user_created: bool = False
    collections_created: list[str] = field(default_factory=list)
    collections_updated: list[str] = field(default_factory=list)
    indexes_created: list[str] = field(default_factory=list)
    indexes_existing: list[str] = field(default_factory=list)

    @property
    def changed(self) -> bool:
        return bool(self.user_created or self.collections_created or self.indexes_created)


# ==================== Steps ====================

async def create_application_user(
    db: AsyncIOMotorDatabase,
    credentials: AppCredentials,
    strict: bool = False,
) -> bool:
    """
    Ensure the application principal exists with exactly its configured role.

    Args:
        db: Database the principal is defined on (its authentication database)
        credentials: Principal name, secret and role scope
        strict: Raise instead of reconciling an existing principal

    Returns:
        True if the principal was created, False if it already existed

    Raises:
        DuplicateResourceError: If the principal exists and strict is set
    """
    info = await db.command("usersInfo", credentials.username)
    if info.get("users"):
        if strict:
            raise DuplicateResourceError(f"User '{credentials.username}' already exists on '{db.name}'")
        await db.command(
            "updateUser",
            credentials.username,
            pwd=credentials.password,
            roles=credentials.roles,
        )
        logger.warning(
            f"User '{credentials.username}' already exists, re-granted {credentials.role} on '{credentials.database}'"
        )
        return False

    try:
        await db.command(
            "createUser",
            credentials.username,
            pwd=credentials.password,
            roles=credentials.roles,
        )
    except OperationFailure as e:
        if e.code != USER_ALREADY_EXISTS:
            raise
        # Created concurrently between usersInfo and createUser
        if strict:
            raise DuplicateResourceError(f"User '{credentials.username}' already exists on '{db.name}'") from e
        logger.warning(f"User '{credentials.username}' was created concurrently, continuing")
        return False

    logger.info(f"Created user '{credentials.username}' with {credentials.role} on '{credentials.database}'")
    return True


async def define_collection(
    db: AsyncIOMotorDatabase,
    spec: CollectionSpec,
    strict: bool = False,
) -> bool:
    """
    Ensure a collection exists with the given validator.

    An existing collection gets the validator re-applied with `collMod`.
    Documents stored before that are not re-validated.

    Returns:
        True if the collection was created, False if it already existed
    """
    existing = await db.list_collection_names()
    if spec.name not in existing:
        logger.info(f"Creating {spec.name} collection...")
        try:
            await db.create_collection(spec.name, **spec.options)
            return True
        except CollectionInvalid:
            logger.debug(f"Collection '{spec.name}' appeared concurrently")

    if strict:
        raise DuplicateResourceError(f"Collection '{spec.name}' already exists")

    await db.command("collMod", spec.name, **spec.options)
    logger.warning(f"Collection '{spec.name}' already exists, validator re-applied")
    return False


async def create_index(collection: AsyncIOMotorCollection, spec: IndexSpec, strict: bool = False) -> bool:
    """
    Ensure an index exists.

    An identical existing index is left alone. An index with the same name
    but a different definition is never dropped.

    Returns:
        True if the index was created, False if it already existed

    Raises:
        DuplicateResourceError: On a conflicting definition, or on any
            existing index when strict is set
    """
    existing = await collection.index_information()
    current = existing.get(spec.name)
    if current is not None:
        if not spec.matches(current):
            raise DuplicateResourceError(
                f"Index {spec.collection}.{spec.name} exists with a different definition: {current}"
            )
        if strict:
            raise DuplicateResourceError(f"Index {spec.describe()} already exists")
        logger.info(f"Index {spec.describe()} already present")
        return False

    try:
        await collection.create_index(spec.keys, **spec.options)
    except OperationFailure as e:
        if e.code in (INDEX_OPTIONS_CONFLICT, INDEX_KEY_SPECS_CONFLICT):
            raise DuplicateResourceError(f"Index {spec.describe()} conflicts with an existing index: {e}") from e
        raise

    logger.debug(f"Created index {spec.describe()}")
    return True


# ==================== Full run ====================

async def provision(config: ProvisionConfig) -> ProvisionReport:
    """
    Provision the target database.

    Runs user creation, collection definitions and index creation strictly
    in sequence and stops at the first failure.

    Raises:
        ConnectivityError: If the server connection drops mid-run
        DuplicateResourceError: See create_application_user / define_collection / create_index
        ProvisioningError: Any other driver error, naming the failed step
    """
    db = config.client[config.db_name]
    report = ProvisionReport(db_name=config.db_name)
    step: Optional[str] = None

    try:
        step = f"create user '{config.credentials.username}'"
        report.user_created = await create_application_user(db, config.credentials, config.strict)

        for spec in config.collections:
            step = f"define collection '{spec.name}'"
            if await define_collection(db, spec, config.strict):
                report.collections_created.append(spec.name)
            else:
                report.collections_updated.append(spec.name)

        logger.info("Creating indexes...")
        for spec in config.indexes:
            step = f"create index {spec.describe()}"
            if await create_index(db[spec.collection], spec, config.strict):
                report.indexes_created.append(spec.describe())
            else:
                report.indexes_existing.append(spec.describe())

        step = "record provisioning metadata"
        await record_provisioning(db, config.manifest, index_count=len(config.indexes))
    except ProvisioningError:
        logger.error(f"Provisioning stopped at: {step}")
        raise
    except ConnectionFailure as e:
        logger.error(f"Provisioning stopped at: {step}")
        raise ConnectivityError(f"Lost connection to MongoDB during {step}: {e}") from e
    except PyMongoError as e:
        logger.error(f"Provisioning stopped at: {step}")
        raise ProvisioningError(f"Failed to {step}: {e}") from e

    logger.info(
        f"Provisioned '{config.db_name}': "
        f"{len(report.collections_created)} collection(s) created, "
        f"{len(report.collections_updated)} updated, "
        f"{len(report.indexes_created)} index(es) created, "
        f"{len(report.indexes_existing)} already present"
    )
    return report
