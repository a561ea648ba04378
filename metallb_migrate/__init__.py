"""Migration of legacy MetalLB AddressPools to IPAddressPools and advertisements."""

__version__ = "0.1.0"
