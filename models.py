"""
Data structure definitions.

Type-safe, immutable data models for the default interface, user overrides
and egress information. Unset values are always None, never "".
"""

from dataclasses import dataclass, fields
from typing import Optional

from enums import AddressingMode, DataMarker


# Fields shared by InterfaceSnapshot and ConfigOverride
CONFIG_FIELDS = (
    "ip_address",
    "gateway",
    "prefix_length",
    "dns_primary",
    "dns_secondary",
    "dns_suffix",
)


@dataclass(frozen=True)
class InterfaceCandidate:
    """
    An interface owning a default route, as seen during resolution.

    Attributes:
        index: Kernel interface index
        metric: Default route metric (lower = higher priority)
        connected: True if the link is operationally up
        ipv4: True if the interface carries an IPv4 address
    """

    index: int
    metric: int
    connected: bool = True
    ipv4: bool = True


@dataclass(frozen=True)
class InterfaceSnapshot:
    """
    Observed IPv4 configuration of the default interface.

    Attributes:
        alias: Interface name (e.g., eth0, wlp8s0)
        index: Kernel interface index
        mode: DHCP if the address was leased, Static otherwise
        ip_address: IPv4 address or None
        gateway: Default route next hop or None
        prefix_length: Prefix length (0-32) or None
        dns_primary: First configured DNS server or None
        dns_secondary: Second configured DNS server or None
        dns_suffix: Connection-specific search domain or None
        max_width: Longest rendered value, used for column alignment
    """

    alias: str
    index: int
    mode: AddressingMode
    ip_address: Optional[str] = None
    gateway: Optional[str] = None
    prefix_length: Optional[int] = None
    dns_primary: Optional[str] = None
    dns_secondary: Optional[str] = None
    dns_suffix: Optional[str] = None
    max_width: int = 0


@dataclass(frozen=True)
class ConfigOverride:
    """
    User-supplied replacement values for static configuration.

    Any subset of fields may be set; None means "keep the current value".
    """

    ip_address: Optional[str] = None
    gateway: Optional[str] = None
    prefix_length: Optional[int] = None
    dns_primary: Optional[str] = None
    dns_secondary: Optional[str] = None
    dns_suffix: Optional[str] = None

    def is_empty(self) -> bool:
        """True if no field is set."""
        return all(getattr(self, f.name) is None for f in fields(self))

    def set_fields(self) -> list[str]:
        """Names of the fields that carry a value."""
        return [f.name for f in fields(self) if getattr(self, f.name) is not None]

    @property
    def dns_servers(self) -> list[str]:
        """DNS servers to configure in order, unset entries dropped."""
        return [s for s in (self.dns_primary, self.dns_secondary) if s is not None]


@dataclass
class EgressInfo:
    """
    Egress connection information from external API.

    Attributes:
        external_ip: Public IPv4 address
        isp: Internet Service Provider name
        country: Country code (ISO 3166-1 alpha-2)
    """

    external_ip: str
    isp: str
    country: str

    @classmethod
    def create_error(cls) -> "EgressInfo":
        """
        Create an EgressInfo indicating an error occurred.

        Returns:
            EgressInfo with all fields set to DataMarker.ERROR
        """
        return cls(
            external_ip=DataMarker.ERROR,
            isp=DataMarker.ERROR,
            country=DataMarker.ERROR
        )
