"""Current MetalLB resources: pools and protocol advertisements as separate objects."""

from typing import ClassVar

from pydantic import Field

from ..constants import (
    BGP_ADVERTISEMENT_KIND,
    INT32_MAX,
    INT32_MIN,
    IP_ADDRESS_POOL_KIND,
    L2_ADVERTISEMENT_KIND,
    UINT32_MAX,
)
from .base import MetalLBResource, SpecModel


class IPAddressPoolSpec(SpecModel):
    """Addresses available for allocation."""

    addresses: list[str] = Field(default_factory=list)
    auto_assign: bool = Field(default=True, alias="autoAssign")


class L2AdvertisementSpec(SpecModel):
    """Layer 2 (ARP/NDP) announcement of the referenced pools."""

    ip_address_pools: list[str] = Field(default_factory=list, alias="ipAddressPools")


class BGPAdvertisementSpec(SpecModel):
    """BGP announcement of the referenced pools."""

    omit_empty: ClassVar[frozenset[str]] = frozenset({"local_pref", "communities"})

    aggregation_length: int | None = Field(
        default=None, alias="aggregationLength", ge=INT32_MIN, le=INT32_MAX
    )
    aggregation_length_v6: int | None = Field(
        default=None, alias="aggregationLengthV6", ge=INT32_MIN, le=INT32_MAX
    )
    local_pref: int = Field(default=0, alias="localPref", ge=0, le=UINT32_MAX)
    communities: list[str] = Field(default_factory=list)
    ip_address_pools: list[str] = Field(default_factory=list, alias="ipAddressPools")


class IPAddressPool(MetalLBResource):
    """MetalLB IPAddressPool."""

    kind: ClassVar[str] = IP_ADDRESS_POOL_KIND

    spec: IPAddressPoolSpec = Field(default_factory=IPAddressPoolSpec)


class L2Advertisement(MetalLBResource):
    """MetalLB L2Advertisement."""

    kind: ClassVar[str] = L2_ADVERTISEMENT_KIND

    spec: L2AdvertisementSpec = Field(default_factory=L2AdvertisementSpec)


class BGPAdvertisement(MetalLBResource):
    """MetalLB BGPAdvertisement."""

    kind: ClassVar[str] = BGP_ADVERTISEMENT_KIND

    spec: BGPAdvertisementSpec = Field(default_factory=BGPAdvertisementSpec)
