"""Legacy MetalLB resources: the combined pool + protocol AddressPool."""

from typing import ClassVar

from pydantic import Field

from ..constants import ADDRESS_POOL_KIND, INT32_MAX, INT32_MIN, UINT32_MAX
from .base import MetalLBResource, SpecModel


class LegacyBgpAdvertisement(SpecModel):
    """BGP announcement tuning embedded in a legacy AddressPool."""

    omit_empty: ClassVar[frozenset[str]] = frozenset({"local_pref", "communities"})

    aggregation_length: int | None = Field(
        default=None, alias="aggregationLength", ge=INT32_MIN, le=INT32_MAX
    )
    aggregation_length_v6: int | None = Field(
        default=None, alias="aggregationLengthV6", ge=INT32_MIN, le=INT32_MAX
    )
    local_pref: int = Field(default=0, alias="localPref", ge=0, le=UINT32_MAX)
    communities: list[str] = Field(default_factory=list)


class AddressPoolSpec(SpecModel):
    """Spec of a legacy AddressPool.

    ``protocol`` stays free text so unsupported values reach the converter
    and are rejected there rather than on read.
    """

    omit_empty: ClassVar[frozenset[str]] = frozenset({"bgp_advertisements"})

    protocol: str = ""
    addresses: list[str] = Field(default_factory=list)
    auto_assign: bool = Field(default=True, alias="autoAssign")
    bgp_advertisements: list[LegacyBgpAdvertisement] = Field(
        default_factory=list, alias="bgpAdvertisements"
    )


class AddressPool(MetalLBResource):
    """Legacy MetalLB AddressPool."""

    kind: ClassVar[str] = ADDRESS_POOL_KIND

    spec: AddressPoolSpec = Field(default_factory=AddressPoolSpec)
