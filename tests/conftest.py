"""
Pytest configuration and shared fixtures.

Provides a recording fake of the platform accessor plus sample command
output for the parsing tests.
"""

import logging
from typing import Generator

import pytest
from _pytest.logging import LogCaptureFixture

from enums import AddressingMode
from models import InterfaceSnapshot
from fakes import FakeInterface, FakePlatform


# ============================================================================
# Logging Fixtures
# ============================================================================

@pytest.fixture
def disable_logging() -> Generator[None, None, None]:
    """Disable logging during tests to reduce noise."""
    logging.disable(logging.CRITICAL)
    yield
    logging.disable(logging.NOTSET)


@pytest.fixture
def caplog_debug(caplog: LogCaptureFixture) -> LogCaptureFixture:
    """Capture DEBUG level logs in tests."""
    caplog.set_level(logging.DEBUG)
    return caplog


# ============================================================================
# Platform Fixtures
# ============================================================================

@pytest.fixture
def static_iface() -> FakeInterface:
    """eth0 statically configured: 10.0.0.5/24 via 10.0.0.1, DNS 8.8.8.8."""
    return FakeInterface(
        index=2,
        alias="eth0",
        metric=100,
        ip_address="10.0.0.5",
        prefix_length=24,
        gateway="10.0.0.1",
        dns=["8.8.8.8"],
    )


@pytest.fixture
def static_platform(static_iface: FakeInterface) -> FakePlatform:
    """Single default interface with a static configuration."""
    return FakePlatform(static_iface)


@pytest.fixture
def dhcp_platform() -> FakePlatform:
    """Single default interface holding a DHCP lease."""
    return FakePlatform(FakeInterface(
        index=3,
        alias="wlan0",
        ip_address="192.168.1.23",
        prefix_length=24,
        gateway="192.168.1.1",
        dhcp=True,
        dns=["192.168.1.1", "1.1.1.1"],
        suffix="home.lan",
    ))


@pytest.fixture
def sample_snapshot() -> InterfaceSnapshot:
    """Snapshot matching static_iface."""
    return InterfaceSnapshot(
        alias="eth0",
        index=2,
        mode=AddressingMode.STATIC,
        ip_address="10.0.0.5",
        gateway="10.0.0.1",
        prefix_length=24,
        dns_primary="8.8.8.8",
        dns_secondary=None,
        dns_suffix=None,
        max_width=8,
    )


@pytest.fixture
def point_to_point_platform() -> FakePlatform:
    """ppp0 owning a device-only default route (no gateway)."""
    return FakePlatform(
        FakeInterface(
            index=4,
            alias="ppp0",
            ip_address="10.64.0.2",
            prefix_length=32,
            dns=["10.64.0.1"],
        ),
        default_owners=[4],
    )


# ============================================================================
# Command Output Fixtures
# ============================================================================

@pytest.fixture
def mock_ip_link_json() -> str:
    """Sample output from 'ip -j link show'."""
    return """[
{"ifindex":1,"ifname":"lo","flags":["LOOPBACK","UP","LOWER_UP"],"operstate":"UNKNOWN"},
{"ifindex":2,"ifname":"eth0","flags":["BROADCAST","MULTICAST","UP","LOWER_UP"],"operstate":"UP"},
{"ifindex":3,"ifname":"wlan0","flags":["BROADCAST","MULTICAST"],"operstate":"DOWN"},
{"ifindex":7,"ifname":"wg0","flags":["POINTOPOINT","NOARP","UP","LOWER_UP"],"operstate":"UNKNOWN"}
]"""


@pytest.fixture
def mock_default_routes_json() -> str:
    """Sample output from 'ip -j -4 route show default'."""
    return """[
{"dst":"default","gateway":"192.168.1.1","dev":"eth0","protocol":"dhcp","metric":100,"flags":[]},
{"dst":"default","gateway":"192.168.2.1","dev":"wlan0","protocol":"dhcp","metric":600,"flags":[]},
{"dst":"default","gateway":"192.168.1.254","dev":"eth0","protocol":"static","metric":200,"flags":[]}
]"""


@pytest.fixture
def mock_ip_addr_json() -> str:
    """Sample output from 'ip -j -4 addr show dev eth0' with a DHCP lease."""
    return """[{"ifindex":2,"ifname":"eth0","operstate":"UP","addr_info":[
{"family":"inet","local":"192.168.1.100","prefixlen":24,"broadcast":"192.168.1.255",
 "scope":"global","dynamic":true,"label":"eth0","valid_life_time":86395}
]}]"""

