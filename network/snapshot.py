"""
Configuration snapshot reader.

Assembles the current IPv4 configuration of one interface from independent
platform queries. The reads are not atomic: if the interface changes while
they run, the snapshot may mix old and new values.
"""

from typing import Any

from logging_config import get_logger
from enums import AddressingMode
from models import InterfaceSnapshot
from network.platform import LinuxNetworkAccessor
from utils.system import sanitize_for_log

logger = get_logger(__name__)


def field_width(*values: Any) -> int:
    """Length of the longest populated value as it will be displayed."""
    return max((len(str(value)) for value in values if value is not None), default=0)


def read_snapshot(platform: LinuxNetworkAccessor, index: int) -> InterfaceSnapshot:
    """
    Read the current configuration of the interface at index.

    Args:
        platform: Network accessor to query
        index: Interface index from the resolver

    Returns:
        InterfaceSnapshot with unset values as None
    """
    alias = platform.alias(index)
    logger.debug("Reading configuration of %s", sanitize_for_log(alias))

    mode = AddressingMode.DHCP if platform.dhcp_enabled(index) else AddressingMode.STATIC

    ip_address = None
    prefix_length = None
    if (address := platform.ipv4_address(index)) is not None:
        ip_address, prefix_length = address

    gateway = platform.default_gateway(index)

    dns = platform.dns_servers(index)
    dns_primary = dns[0] if dns else None
    dns_secondary = dns[1] if len(dns) > 1 else None

    dns_suffix = platform.dns_suffix(index)

    snapshot = InterfaceSnapshot(
        alias=alias,
        index=index,
        mode=mode,
        ip_address=ip_address,
        gateway=gateway,
        prefix_length=prefix_length,
        dns_primary=dns_primary,
        dns_secondary=dns_secondary,
        dns_suffix=dns_suffix,
        max_width=field_width(
            alias, index, mode, ip_address, gateway, prefix_length,
            dns_primary, dns_secondary, dns_suffix
        ),
    )
    logger.debug("Snapshot: %s", snapshot)
    return snapshot
