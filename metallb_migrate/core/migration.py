"""Offline and online migration of legacy MetalLB objects."""

import sys
from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path
from typing import TextIO

import structlog
from pydantic import BaseModel, Field

from ..constants import BGP_ADVERTISEMENT_KIND, IP_ADDRESS_POOL_KIND, L2_ADVERTISEMENT_KIND
from ..models import MigrationMode, MigrationStage, OutputFormat
from .converter import convert
from .exceptions import (
    BackupError,
    ConfigurationError,
    MetalLBMigrateError,
    MigrationError,
    StoreError,
)
from .objects import CurrentObjects, ObjectSet
from .reader import read_legacy_objects_from_directory, read_legacy_objects_from_store
from .store import ResourceStore

logger = structlog.get_logger()


class MigrationSummary(BaseModel):
    """Outcome of a migration run."""

    mode: MigrationMode
    legacy_pools: int = Field(default=0, description="Legacy AddressPools read or migrated")
    ip_address_pools: int = 0
    l2_advertisements: int = 0
    bgp_advertisements: int = 0
    migrated_pools: list[str] = Field(
        default_factory=list, description="namespace/name of pools replaced in the store"
    )
    backup_files: list[str] = Field(default_factory=list)
    output_files: list[str] = Field(default_factory=list)

    def add(self, current_objects: CurrentObjects) -> None:
        counts = current_objects.counts()
        self.ip_address_pools += counts[IP_ADDRESS_POOL_KIND]
        self.l2_advertisements += counts[L2_ADVERTISEMENT_KIND]
        self.bgp_advertisements += counts[BGP_ADVERTISEMENT_KIND]


@contextmanager
def _stage(stage: MigrationStage) -> Iterator[None]:
    """Attach the stage name to any migration error raised inside the block."""
    try:
        yield
    except MigrationError:
        raise
    except MetalLBMigrateError as e:
        raise MigrationError(stage.value, str(e)) from e


def _write(
    objects: ObjectSet, destination: TextIO | Path | str, output_format: OutputFormat
) -> list[str]:
    """Serialize either object set shape, returning the names of files written."""
    return [str(path) for path in objects.serialize(destination, output_format)]


def offline_migration(
    store: ResourceStore | None = None,
    input_dir: Path | str | None = None,
    output_dir: Path | str | None = None,
    output_format: OutputFormat = OutputFormat.YAML,
    stdout: TextIO | None = None,
) -> MigrationSummary:
    """Read legacy objects, convert them and print the result.

    Legacy objects come from ``input_dir`` when given, else from ``store``.
    The result goes to ``output_dir`` when given, else to ``stdout``.
    The store is never modified.

    Raises:
        ConfigurationError: If neither an input directory nor a store is given
        MigrationError: If any stage fails, with the failing stage attached
    """
    if input_dir is None and store is None:
        raise ConfigurationError("offline migration needs an input directory or a store")

    with _stage(MigrationStage.RETRIEVAL):
        if input_dir is None:
            legacy_objects = read_legacy_objects_from_store(store)
        else:
            legacy_objects = read_legacy_objects_from_directory(input_dir)

    with _stage(MigrationStage.CONVERSION):
        current_objects = convert(legacy_objects)

    with _stage(MigrationStage.PRINT):
        destination = output_dir if output_dir is not None else (stdout or sys.stdout)
        output_files = _write(current_objects, destination, output_format)

    summary = MigrationSummary(
        mode=MigrationMode.OFFLINE,
        legacy_pools=len(legacy_objects.address_pools),
        output_files=output_files,
    )
    summary.add(current_objects)
    logger.info("Offline migration complete", **summary.model_dump(mode="json"))
    return summary


def online_migration(
    store: ResourceStore,
    backup_dir: Path | str,
    output_format: OutputFormat = OutputFormat.YAML,
) -> MigrationSummary:
    """Migrate legacy AddressPools in the store one by one.

    All legacy objects are written to ``backup_dir`` first. Each pool is then
    fetched, converted, deleted and replaced by its converted objects.
    Deletion and creation are not atomic: if creation fails the pool is
    missing from the store until restored from the backup. There is no
    retry and no rollback.

    Raises:
        ConfigurationError: If no backup directory is given
        BackupError: If the backup cannot be read or written
        MigrationError: If a later stage fails, with the failing stage attached
    """
    if not backup_dir:
        raise ConfigurationError("online migration requires a backup directory")

    log = logger.bind(component="online_migration")
    summary = MigrationSummary(mode=MigrationMode.ONLINE)

    try:
        snapshot = read_legacy_objects_from_store(store)
        backup_files = _write(snapshot, Path(backup_dir), output_format)
    except MetalLBMigrateError as e:
        raise BackupError(str(e)) from e
    summary.backup_files = backup_files
    log.info(
        "Backed up legacy objects",
        count=len(snapshot.address_pools),
        backup_dir=str(backup_dir),
    )

    # Reject unconvertible pools before anything in the store is touched
    with _stage(MigrationStage.PREFLIGHT):
        convert(snapshot)

    migrated: set[tuple[str, str]] = set()
    while True:
        with _stage(MigrationStage.RETRIEVAL):
            legacy_objects = read_legacy_objects_from_store(store, limit=1)
        if not legacy_objects.address_pools:
            break

        address_pool = legacy_objects.address_pools[0]
        key = (address_pool.namespace, address_pool.name)
        if key in migrated:
            raise MigrationError(
                MigrationStage.RETRIEVAL.value,
                f"AddressPool '{address_pool.qualified_name}' is still listed after deletion",
            )
        log.info("Migrating AddressPool", pool=address_pool.qualified_name)

        with _stage(MigrationStage.CONVERSION):
            current_objects = convert(legacy_objects)

        with _stage(MigrationStage.DELETION):
            legacy_objects.delete(store)

        try:
            current_objects.create(store)
        except StoreError as e:
            log.error(
                "Legacy pool deleted but its replacement was not created, restore it from backup",
                pool=address_pool.qualified_name,
                backup_dir=str(backup_dir),
                error=str(e),
            )
            raise MigrationError(
                MigrationStage.CREATION.value,
                f"AddressPool '{address_pool.qualified_name}' was deleted "
                f"but not replaced: {e}",
            ) from e

        migrated.add(key)
        summary.legacy_pools += 1
        summary.migrated_pools.append(address_pool.qualified_name)
        summary.add(current_objects)

    log.info("Online migration complete", **summary.model_dump(mode="json"))
    return summary
