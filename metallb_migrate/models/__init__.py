"""Data models for MetalLB migration."""

from .base import MetalLBResource, ObjectMeta  # noqa: F401
from .current import (  # noqa: F401
    BGPAdvertisement,
    BGPAdvertisementSpec,
    IPAddressPool,
    IPAddressPoolSpec,
    L2Advertisement,
    L2AdvertisementSpec,
)
from .enums import MigrationMode, MigrationStage, OutputFormat  # noqa: F401
from .legacy import AddressPool, AddressPoolSpec, LegacyBgpAdvertisement  # noqa: F401

__all__ = [
    # Shared
    "MetalLBResource",
    "ObjectMeta",
    # Legacy models
    "AddressPool",
    "AddressPoolSpec",
    "LegacyBgpAdvertisement",
    # Current models
    "BGPAdvertisement",
    "BGPAdvertisementSpec",
    "IPAddressPool",
    "IPAddressPoolSpec",
    "L2Advertisement",
    "L2AdvertisementSpec",
    # Enums
    "MigrationMode",
    "MigrationStage",
    "OutputFormat",
]
