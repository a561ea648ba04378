"""Shared pytest fixtures for MetalLB migration tests."""

import logging
from collections.abc import Callable
from pathlib import Path

import pytest
import structlog

from metallb_migrate.core.objects import LegacyObjects
from metallb_migrate.core.store import InMemoryStore
from metallb_migrate.models import (
    AddressPool,
    AddressPoolSpec,
    LegacyBgpAdvertisement,
    ObjectMeta,
)

NAMESPACE = "metallb-system"


@pytest.fixture(autouse=True)
def reset_logging():
    """Drop handlers installed by setup_logging so later tests never write to closed streams."""
    yield
    logging.getLogger().handlers.clear()
    structlog.reset_defaults()


@pytest.fixture
def fixtures_dir() -> Path:
    """Directory holding legacy YAML and JSON files."""
    return Path(__file__).parent / "fixtures" / "legacy"


@pytest.fixture
def make_address_pool() -> Callable[..., AddressPool]:
    """Factory for legacy AddressPools in the metallb-system namespace."""

    def _make(
        name: str,
        protocol: str,
        addresses: list[str] | None = None,
        bgp_advertisements: list[LegacyBgpAdvertisement] | None = None,
        auto_assign: bool = True,
        namespace: str = NAMESPACE,
    ) -> AddressPool:
        return AddressPool(
            metadata=ObjectMeta(name=name, namespace=namespace),
            spec=AddressPoolSpec(
                protocol=protocol,
                addresses=addresses or ["192.168.100.100"],
                auto_assign=auto_assign,
                bgp_advertisements=bgp_advertisements or [],
            ),
        )

    return _make


@pytest.fixture
def legacy_objects(make_address_pool) -> LegacyObjects:
    """One layer2 pool, one bgp pool with two advertisements, one bgp pool with none.

    Matches the files under tests/fixtures/legacy.
    """
    return LegacyObjects(
        address_pools=[
            make_address_pool("ap-l2", "layer2", addresses=["192.168.100.100"]),
            make_address_pool(
                "ap-bgp",
                "bgp",
                addresses=["192.168.101.0/24"],
                bgp_advertisements=[
                    LegacyBgpAdvertisement(
                        aggregation_length=32,
                        aggregation_length_v6=64,
                        local_pref=10,
                        communities=["65432:12345"],
                    ),
                    LegacyBgpAdvertisement(
                        aggregation_length=32,
                        aggregation_length_v6=64,
                        local_pref=11,
                        communities=["65433:12346"],
                    ),
                ],
            ),
            make_address_pool(
                "ap-bgp2",
                "bgp",
                addresses=["192.168.102.10-192.168.102.20"],
                auto_assign=False,
            ),
        ]
    )


@pytest.fixture
def store(legacy_objects: LegacyObjects) -> InMemoryStore:
    """In-memory store seeded with the legacy objects."""
    return InMemoryStore([pool.to_manifest() for pool in legacy_objects.address_pools])
