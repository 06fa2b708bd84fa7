"""
Enumeration types for ifdefault.

Provides type-safe constants for addressing modes and display markers.
"""

from enum import Enum


class AddressingMode(str, Enum):
    """
    How the interface obtains its IPv4 configuration.

    Inherits from str so values can be printed and serialized directly.
    """
    DHCP = "DHCP"
    STATIC = "Static"

    def __str__(self) -> str:
        """Return the value for string operations."""
        return self.value


class Action(str, Enum):
    """What the invocation was asked to do."""
    STATUS = "status"
    STATIC = "static"
    DHCP = "dhcp"

    def __str__(self) -> str:
        """Return the value for string operations."""
        return self.value


class DataMarker(str, Enum):
    """
    Special markers for data that cannot be displayed as a value.

    Used by the presenter and exporter only; the data model itself
    represents missing values as None.
    """
    NOT_APPLICABLE = "--"
    ERROR = "ERR"

    def __str__(self) -> str:
        """Return the value for string operations."""
        return self.value
