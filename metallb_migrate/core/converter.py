"""Conversion of legacy AddressPools into pools and protocol advertisements."""

from ..constants import (
    BGP_ADVERTISEMENT_NAME,
    L2_ADVERTISEMENT_NAME,
    PROTOCOL_BGP,
    PROTOCOL_LAYER2,
)
from ..models import (
    AddressPool,
    BGPAdvertisement,
    BGPAdvertisementSpec,
    IPAddressPool,
    IPAddressPoolSpec,
    L2Advertisement,
    L2AdvertisementSpec,
    LegacyBgpAdvertisement,
    ObjectMeta,
)
from .exceptions import UnsupportedProtocolError
from .objects import CurrentObjects, LegacyObjects


def convert(legacy_objects: LegacyObjects) -> CurrentObjects:
    """Convert legacy objects into current objects.

    Pools are emitted in input order, advertisements in input pool order and
    then in advertisement order within a pool. Identical advertisement
    parameters of different pools are never merged.

    Raises:
        UnsupportedProtocolError: If any pool's protocol is neither layer2 nor bgp
    """
    ip_address_pools: list[IPAddressPool] = []
    l2_advertisements: list[L2Advertisement] = []
    bgp_advertisements: list[BGPAdvertisement] = []
    for address_pool in legacy_objects.address_pools:
        fragment = convert_address_pool(address_pool)
        ip_address_pools.extend(fragment.ip_address_pools)
        l2_advertisements.extend(fragment.l2_advertisements)
        bgp_advertisements.extend(fragment.bgp_advertisements)
    return CurrentObjects(
        ip_address_pools=ip_address_pools,
        l2_advertisements=l2_advertisements,
        bgp_advertisements=bgp_advertisements,
    )


def convert_address_pool(address_pool: AddressPool) -> CurrentObjects:
    """Convert a single AddressPool into its pool and advertisements."""
    protocol = address_pool.spec.protocol
    if protocol == PROTOCOL_LAYER2:
        return CurrentObjects(
            ip_address_pools=[_ip_address_pool(address_pool)],
            l2_advertisements=[_l2_advertisement(address_pool)],
        )
    if protocol == PROTOCOL_BGP:
        # A bgp pool without tuning still gets announced, through one default advertisement
        legacy_advertisements = address_pool.spec.bgp_advertisements or [LegacyBgpAdvertisement()]
        return CurrentObjects(
            ip_address_pools=[_ip_address_pool(address_pool)],
            bgp_advertisements=[
                _bgp_advertisement(address_pool, index, advertisement)
                for index, advertisement in enumerate(legacy_advertisements)
            ],
        )
    raise UnsupportedProtocolError(address_pool.namespace, address_pool.name, protocol)


def _ip_address_pool(address_pool: AddressPool) -> IPAddressPool:
    return IPAddressPool(
        metadata=ObjectMeta(name=address_pool.name, namespace=address_pool.namespace),
        spec=IPAddressPoolSpec(
            addresses=list(address_pool.spec.addresses),
            auto_assign=address_pool.spec.auto_assign,
        ),
    )


def _l2_advertisement(address_pool: AddressPool) -> L2Advertisement:
    return L2Advertisement(
        metadata=ObjectMeta(
            name=L2_ADVERTISEMENT_NAME.format(pool=address_pool.name),
            namespace=address_pool.namespace,
        ),
        spec=L2AdvertisementSpec(ip_address_pools=[address_pool.name]),
    )


def _bgp_advertisement(
    address_pool: AddressPool, index: int, advertisement: LegacyBgpAdvertisement
) -> BGPAdvertisement:
    return BGPAdvertisement(
        metadata=ObjectMeta(
            name=BGP_ADVERTISEMENT_NAME.format(pool=address_pool.name, index=index),
            namespace=address_pool.namespace,
        ),
        spec=BGPAdvertisementSpec(
            aggregation_length=advertisement.aggregation_length,
            aggregation_length_v6=advertisement.aggregation_length_v6,
            local_pref=advertisement.local_pref,
            communities=list(advertisement.communities),
            ip_address_pools=[address_pool.name],
        ),
    )
