"""Reading legacy objects from a store or from a directory of documents."""

from pathlib import Path
from typing import Any

import structlog
from pydantic import ValidationError

from ..constants import (
    ADDRESS_POOL_KIND,
    ADDRESS_POOL_LIST_KIND,
    METALLB_API_GROUP,
    SUPPORTED_LEGACY_VERSIONS,
)
from ..models import AddressPool
from .exceptions import ResourceIOError, UnrecognizedSchemaError
from .objects import LegacyObjects
from .serializer import parse_document, split_documents
from .store import ResourceStore

logger = structlog.get_logger()


def read_legacy_objects_from_store(store: ResourceStore, limit: int = 0) -> LegacyObjects:
    """Read legacy AddressPools from the store.

    Args:
        store: Store to list from
        limit: Maximum number of pools to return, 0 for all

    Raises:
        ValueError: If limit is negative
        StoreError: If listing fails
        UnrecognizedSchemaError: If a listed item does not validate
    """
    if limit < 0:
        raise ValueError(f"invalid limit {limit}")

    items = store.list(ADDRESS_POOL_KIND, limit=limit)
    # Stores may ignore the limit; never hand back more than asked for
    if limit > 0:
        items = items[:limit]
    address_pools = [_address_pool(item, source="store") for item in items]
    logger.debug("Read legacy objects from store", count=len(address_pools), limit=limit)
    return LegacyObjects(address_pools=address_pools)


def read_legacy_objects_from_directory(directory: Path | str) -> LegacyObjects:
    """Read legacy AddressPools from every file of a directory.

    Files are read in name order and split into documents on ``---`` lines.
    Each document must be a ``metallb.io/v1beta1`` AddressPool or
    AddressPoolList; anything else fails the whole read.

    Raises:
        ResourceIOError: If the directory or a file cannot be read
        UnrecognizedSchemaError: If a document has an unsupported group, version or kind
    """
    directory = Path(directory)
    try:
        paths = sorted(path for path in directory.iterdir() if path.is_file())
    except OSError as e:
        raise ResourceIOError(
            f"could not read legacy objects from directory {directory}: {e}"
        ) from e

    address_pools: list[AddressPool] = []
    for path in paths:
        try:
            content = path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            raise ResourceIOError(f"could not read legacy objects from file {path}: {e}") from e
        for document in split_documents(content):
            data = parse_document(document, str(path))
            address_pools.extend(decode_legacy_document(data, str(path)))

    logger.info(
        "Read legacy objects from directory",
        directory=str(directory),
        files=len(paths),
        count=len(address_pools),
    )
    return LegacyObjects(address_pools=address_pools)


def decode_legacy_document(data: dict[str, Any], source: str | None = None) -> list[AddressPool]:
    """Decode one AddressPool or AddressPoolList document into its pools."""
    api_version = data.get("apiVersion")
    if not isinstance(api_version, str) or "/" not in api_version:
        raise UnrecognizedSchemaError(f"invalid apiVersion {api_version!r}", source)
    group, version = api_version.rsplit("/", 1)
    if group != METALLB_API_GROUP:
        raise UnrecognizedSchemaError(f"invalid group {group!r}", source)
    if version not in SUPPORTED_LEGACY_VERSIONS:
        raise UnrecognizedSchemaError(f"invalid version {version!r}", source)

    kind = data.get("kind")
    if kind == ADDRESS_POOL_KIND:
        return [_address_pool(data, source)]
    if kind == ADDRESS_POOL_LIST_KIND:
        items = data.get("items") or []
        if not isinstance(items, list):
            raise UnrecognizedSchemaError(f"{ADDRESS_POOL_LIST_KIND} items is not a list", source)
        return [_address_pool(item, source) for item in items]
    raise UnrecognizedSchemaError(f"unsupported kind {kind!r}", source)


def _address_pool(data: Any, source: str | None) -> AddressPool:
    if not isinstance(data, dict):
        raise UnrecognizedSchemaError(f"{ADDRESS_POOL_KIND} is not a mapping", source)
    try:
        return AddressPool.from_manifest(data)
    except ValidationError as e:
        raise UnrecognizedSchemaError(f"invalid {ADDRESS_POOL_KIND}: {e}", source) from e
