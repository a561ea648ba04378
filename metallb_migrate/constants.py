"""Centralized constants for MetalLB migration to eliminate duplicate strings."""

# API identity
METALLB_API_GROUP = "metallb.io"
METALLB_API_VERSION = "v1beta1"
METALLB_GROUP_VERSION = f"{METALLB_API_GROUP}/{METALLB_API_VERSION}"
SUPPORTED_LEGACY_VERSIONS = frozenset({METALLB_API_VERSION})

# Legacy kinds
ADDRESS_POOL_KIND = "AddressPool"
ADDRESS_POOL_LIST_KIND = "AddressPoolList"

# Current kinds
IP_ADDRESS_POOL_KIND = "IPAddressPool"
L2_ADVERTISEMENT_KIND = "L2Advertisement"
BGP_ADVERTISEMENT_KIND = "BGPAdvertisement"

# REST resource names, used for listing and deleting through the API server
KIND_PLURALS = {
    ADDRESS_POOL_KIND: "addresspools",
    IP_ADDRESS_POOL_KIND: "ipaddresspools",
    L2_ADVERTISEMENT_KIND: "l2advertisements",
    BGP_ADVERTISEMENT_KIND: "bgpadvertisements",
}

# Legacy protocols
PROTOCOL_LAYER2 = "layer2"
PROTOCOL_BGP = "bgp"

# Derived resource names
L2_ADVERTISEMENT_NAME = "{pool}-l2-advertisement"
BGP_ADVERTISEMENT_NAME = "{pool}-bgp-advertisement-{index}"

# Multi-document text
DOCUMENT_BOUNDARY = "---"

# Integer ranges of the MetalLB CRD fields
INT32_MIN = -(2**31)
INT32_MAX = 2**31 - 1
UINT32_MAX = 2**32 - 1
