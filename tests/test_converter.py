"""Tests for legacy to current object conversion."""

import pytest

from metallb_migrate.core.converter import convert, convert_address_pool
from metallb_migrate.core.exceptions import UnsupportedProtocolError
from metallb_migrate.core.objects import CurrentObjects, LegacyObjects
from metallb_migrate.models import LegacyBgpAdvertisement


class TestConvert:
    """Test suite for convert()."""

    def test_three_pool_scenario(self, legacy_objects):
        """Test the layer2 + bgp + empty bgp scenario yields 3 pools, 1 L2 and 3 BGP objects."""
        current = convert(legacy_objects)

        assert [pool.name for pool in current.ip_address_pools] == ["ap-l2", "ap-bgp", "ap-bgp2"]
        assert [adv.name for adv in current.l2_advertisements] == ["ap-l2-l2-advertisement"]
        assert [adv.name for adv in current.bgp_advertisements] == [
            "ap-bgp-bgp-advertisement-0",
            "ap-bgp-bgp-advertisement-1",
            "ap-bgp2-bgp-advertisement-0",
        ]

    def test_empty_input(self):
        """Test zero pools convert to an empty current set."""
        current = convert(LegacyObjects())

        assert current == CurrentObjects()
        assert current.count() == 0

    def test_pool_projection(self, legacy_objects):
        """Test every legacy pool yields one IPAddressPool with copied fields."""
        current = convert(legacy_objects)

        assert len(current.ip_address_pools) == len(legacy_objects.address_pools)
        for legacy, pool in zip(legacy_objects.address_pools, current.ip_address_pools):
            assert pool.metadata == legacy.metadata
            assert pool.spec.addresses == legacy.spec.addresses
            assert pool.spec.auto_assign == legacy.spec.auto_assign

        assert current.ip_address_pools[2].spec.auto_assign is False

    def test_layer2_pool(self, make_address_pool):
        """Test a layer2 pool yields one L2Advertisement naming the pool."""
        current = convert(LegacyObjects(address_pools=[make_address_pool("pool-a", "layer2")]))

        assert current.bgp_advertisements == []
        (advertisement,) = current.l2_advertisements
        assert advertisement.name == "pool-a-l2-advertisement"
        assert advertisement.namespace == "metallb-system"
        assert advertisement.spec.ip_address_pools == ["pool-a"]

    def test_bgp_pool_advertisements_copied_verbatim(self, legacy_objects):
        """Test each legacy advertisement becomes one BGPAdvertisement with the same fields."""
        current = convert(legacy_objects)
        legacy_advertisements = legacy_objects.address_pools[1].spec.bgp_advertisements

        for index, legacy in enumerate(legacy_advertisements):
            advertisement = current.bgp_advertisements[index]
            assert advertisement.name == f"ap-bgp-bgp-advertisement-{index}"
            assert advertisement.spec.aggregation_length == legacy.aggregation_length
            assert advertisement.spec.aggregation_length_v6 == legacy.aggregation_length_v6
            assert advertisement.spec.local_pref == legacy.local_pref
            assert advertisement.spec.communities == legacy.communities
            assert advertisement.spec.ip_address_pools == ["ap-bgp"]

    def test_bgp_pool_without_advertisements(self, make_address_pool):
        """Test a bgp pool without advertisements gets one default advertisement."""
        current = convert(LegacyObjects(address_pools=[make_address_pool("pool-b", "bgp")]))

        (advertisement,) = current.bgp_advertisements
        assert advertisement.name == "pool-b-bgp-advertisement-0"
        assert advertisement.spec.aggregation_length is None
        assert advertisement.spec.aggregation_length_v6 is None
        assert advertisement.spec.local_pref == 0
        assert advertisement.spec.communities == []
        assert advertisement.spec.ip_address_pools == ["pool-b"]
        assert "localPref" not in advertisement.to_manifest()["spec"]

    def test_absent_aggregation_length_stays_absent(self, make_address_pool):
        """Test an unset aggregation length is not coerced to zero."""
        pool = make_address_pool(
            "pool-c",
            "bgp",
            bgp_advertisements=[LegacyBgpAdvertisement(aggregation_length_v6=120)],
        )

        (advertisement,) = convert(LegacyObjects(address_pools=[pool])).bgp_advertisements

        assert advertisement.spec.aggregation_length is None
        assert advertisement.spec.aggregation_length_v6 == 120

    def test_identical_advertisements_not_deduplicated(self, make_address_pool):
        """Test two pools with identical tuning produce two separate advertisements."""
        tuning = LegacyBgpAdvertisement(local_pref=100, communities=["65000:1"])
        legacy = LegacyObjects(
            address_pools=[
                make_address_pool("pool-1", "bgp", bgp_advertisements=[tuning]),
                make_address_pool("pool-2", "bgp", bgp_advertisements=[tuning]),
            ]
        )

        current = convert(legacy)

        assert [adv.spec.ip_address_pools for adv in current.bgp_advertisements] == [
            ["pool-1"],
            ["pool-2"],
        ]

    def test_unsupported_protocol(self, make_address_pool):
        """Test an unknown protocol fails the whole conversion."""
        legacy = LegacyObjects(
            address_pools=[
                make_address_pool("good", "layer2"),
                make_address_pool("bad", "ospf"),
            ]
        )

        with pytest.raises(UnsupportedProtocolError, match="ospf") as exc_info:
            convert(legacy)

        assert exc_info.value.name == "bad"
        assert exc_info.value.namespace == "metallb-system"
        assert exc_info.value.protocol == "ospf"

    def test_empty_protocol_unsupported(self, make_address_pool):
        """Test a pool without protocol is rejected."""
        with pytest.raises(UnsupportedProtocolError):
            convert(LegacyObjects(address_pools=[make_address_pool("bare", "")]))

    def test_input_not_shared(self, legacy_objects):
        """Test converted objects hold copies of the legacy lists."""
        current = convert(legacy_objects)

        legacy_pool = legacy_objects.address_pools[0]
        assert current.ip_address_pools[0].spec.addresses is not legacy_pool.spec.addresses
        legacy_adv = legacy_objects.address_pools[1].spec.bgp_advertisements[0]
        assert current.bgp_advertisements[0].spec.communities is not legacy_adv.communities


class TestConvertAddressPool:
    """Test suite for single pool conversion."""

    def test_fragment_for_layer2(self, make_address_pool):
        """Test the fragment holds only the pool and its L2 advertisement."""
        fragment = convert_address_pool(make_address_pool("solo", "layer2"))

        assert fragment.counts() == {
            "IPAddressPool": 1,
            "L2Advertisement": 1,
            "BGPAdvertisement": 0,
        }

    def test_fragment_matches_full_conversion(self, legacy_objects):
        """Test per-pool fragments concatenate to the full conversion."""
        full = convert(legacy_objects)
        fragments = [convert_address_pool(pool) for pool in legacy_objects.address_pools]

        assert [p for f in fragments for p in f.ip_address_pools] == full.ip_address_pools
        assert [a for f in fragments for a in f.bgp_advertisements] == full.bgp_advertisements
