"""Legacy and current object sets with a shared create/delete/serialize lifecycle.

Each set publishes its member collections through ``collections()``, an
explicit ``kind -> collection`` table in output order. The lifecycle
operations iterate that table, so both shapes behave identically.
"""

from collections.abc import Iterator, Sequence
from pathlib import Path
from typing import TextIO

import structlog
from pydantic import BaseModel, ConfigDict, Field

from ..constants import (
    ADDRESS_POOL_KIND,
    BGP_ADVERTISEMENT_KIND,
    IP_ADDRESS_POOL_KIND,
    L2_ADVERTISEMENT_KIND,
)
from ..models import (
    AddressPool,
    BGPAdvertisement,
    IPAddressPool,
    L2Advertisement,
    MetalLBResource,
    OutputFormat,
)
from .exceptions import ResourceNotFoundError, StoreError
from .serializer import ResourceGroup, write_to_directory, write_to_stream
from .store import ResourceStore

logger = structlog.get_logger()


class ObjectSetBase(BaseModel):
    """Lifecycle operations shared by both object set shapes."""

    model_config = ConfigDict(frozen=True)

    def collections(self) -> list[tuple[str, Sequence[MetalLBResource]]]:
        raise NotImplementedError

    def resources(self) -> Iterator[tuple[str, MetalLBResource]]:
        for kind, members in self.collections():
            for resource in members:
                yield kind, resource

    def count(self) -> int:
        return sum(len(members) for _, members in self.collections())

    def counts(self) -> dict[str, int]:
        """Number of members per kind."""
        return {kind: len(members) for kind, members in self.collections()}

    def create(self, store: ResourceStore) -> None:
        """Create every member; the first failure aborts and nothing is rolled back."""
        for kind, resource in self.resources():
            try:
                store.create(resource.to_manifest())
            except StoreError as e:
                raise StoreError(f"cannot create {kind} '{resource.qualified_name}': {e}") from e
            logger.info("Created resource", kind=kind, resource=resource.qualified_name)

    def delete(self, store: ResourceStore) -> None:
        """Delete every member; absent members count as deleted."""
        for kind, resource in self.resources():
            try:
                store.delete(kind, resource.namespace, resource.name)
            except ResourceNotFoundError:
                logger.debug("Resource already absent", kind=kind, resource=resource.qualified_name)
                continue
            except StoreError as e:
                raise StoreError(f"cannot delete {kind} '{resource.qualified_name}': {e}") from e
            logger.info("Deleted resource", kind=kind, resource=resource.qualified_name)

    def serialize(
        self,
        destination: TextIO | Path | str,
        output_format: OutputFormat = OutputFormat.YAML,
    ) -> list[Path]:
        """Render members to a text stream, or to one file per kind in a directory.

        Args:
            destination: Open text stream, or a directory path
            output_format: YAML or JSON

        Returns:
            Files written when the destination is a directory, else an empty list
        """
        groups: list[ResourceGroup] = [
            (kind, [resource.to_manifest() for resource in members])
            for kind, members in self.collections()
        ]
        if isinstance(destination, (str, Path)):
            return write_to_directory(groups, destination, output_format)
        write_to_stream(groups, destination, output_format)
        return []


class LegacyObjects(ObjectSetBase):
    """Legacy MetalLB objects that shall be converted to the current format."""

    address_pools: list[AddressPool] = Field(default_factory=list)

    def collections(self) -> list[tuple[str, Sequence[MetalLBResource]]]:
        return [(ADDRESS_POOL_KIND, self.address_pools)]


class CurrentObjects(ObjectSetBase):
    """Current MetalLB objects produced by conversion."""

    ip_address_pools: list[IPAddressPool] = Field(default_factory=list)
    l2_advertisements: list[L2Advertisement] = Field(default_factory=list)
    bgp_advertisements: list[BGPAdvertisement] = Field(default_factory=list)

    def collections(self) -> list[tuple[str, Sequence[MetalLBResource]]]:
        # Pools first so advertisements are created after the pools they name
        return [
            (IP_ADDRESS_POOL_KIND, self.ip_address_pools),
            (L2_ADVERTISEMENT_KIND, self.l2_advertisements),
            (BGP_ADVERTISEMENT_KIND, self.bgp_advertisements),
        ]


ObjectSet = LegacyObjects | CurrentObjects
