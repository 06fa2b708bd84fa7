"""
Configuration writer.

Applies a static or DHCP configuration to the default interface as an
explicit, ordered list of transition steps.

The underlying commands are not transactional. Steps run in order and the
first failure stops the run with PlatformWriteError; completed steps are not
rolled back. After the address removal step has run, a failure leaves the
interface without IPv4 addressing until a later successful run.
"""

import ipaddress
from dataclasses import dataclass, fields
from typing import Callable

from logging_config import get_logger
from config import REQUIRED_COMMANDS, DHCP_COMMANDS
from errors import (
    ConfigurationError,
    NoOverridesSpecified,
    PrivilegeRequired,
)
from enums import AddressingMode
from models import ConfigOverride, InterfaceSnapshot
from network.platform import LinuxNetworkAccessor
from network.resolver import resolve_default_interface
from network.snapshot import read_snapshot
from utils.system import is_elevated, sanitize_for_log

logger = get_logger(__name__)


@dataclass(frozen=True)
class TransitionStep:
    """One platform call in a configuration transition."""
    name: str
    action: Callable[[], None]


# ============================================================================
# Merge
# ============================================================================

def merge_overrides(snapshot: InterfaceSnapshot, overrides: ConfigOverride) -> ConfigOverride:
    """
    Overlay user overrides on the current configuration.

    Each field takes the override value when set and the snapshot value
    otherwise, so fields the caller did not mention are kept as they are.

    Examples:
        >>> merged = merge_overrides(snapshot, ConfigOverride(gateway="10.0.0.254"))
        >>> merged.ip_address == snapshot.ip_address
        True
    """
    return ConfigOverride(**{
        f.name: getattr(overrides, f.name)
        if getattr(overrides, f.name) is not None
        else getattr(snapshot, f.name)
        for f in fields(ConfigOverride)
    })


def validate_static_config(config: ConfigOverride) -> None:
    """
    Reject merged configurations the kernel would refuse half way through.

    Raises:
        ConfigurationError: Missing address/prefix, or gateway off-subnet
    """
    if config.ip_address is None:
        raise ConfigurationError("No IPv4 address to assign; use --ip-address")
    if config.prefix_length is None:
        raise ConfigurationError("No prefix length to assign; use --cidr")

    if config.gateway is not None:
        network = ipaddress.IPv4Network(
            f"{config.ip_address}/{config.prefix_length}", strict=False
        )
        if ipaddress.IPv4Address(config.gateway) not in network:
            raise ConfigurationError(
                f"Gateway {config.gateway} is not in subnet {network}"
            )


# ============================================================================
# Transition Plans
# ============================================================================

def plan_static_transition(
    platform: LinuxNetworkAccessor,
    snapshot: InterfaceSnapshot,
    config: ConfigOverride,
) -> list[TransitionStep]:
    """
    Ordered steps replacing the interface's configuration with config.

    snapshot must describe the resolved default interface, which owns a
    default route whether or not it has a gateway (ppp, wg and tun links
    route via the device alone).

    1. Stop DHCP (if leased), remove default route, remove addresses
    2. Add address/prefix, add default route (if a gateway is configured)
    3. Set DNS servers (if any)
    4. Set DNS suffix (if any)
    """
    alias = snapshot.alias
    steps: list[TransitionStep] = []

    if snapshot.mode == AddressingMode.DHCP:
        steps.append(TransitionStep("stop DHCP client", lambda: platform.stop_dhcp(alias)))
    steps.append(TransitionStep("remove default route", lambda: platform.remove_default_route(alias)))
    steps.append(TransitionStep("remove IPv4 addresses", lambda: platform.remove_addresses(alias)))

    steps.append(TransitionStep(
        "add IPv4 address",
        lambda: platform.add_address(alias, config.ip_address, config.prefix_length),
    ))
    if config.gateway is not None:
        steps.append(TransitionStep(
            "add default route",
            lambda: platform.add_default_route(alias, config.gateway),
        ))

    servers = config.dns_servers
    if servers:
        steps.append(TransitionStep("set DNS servers", lambda: platform.set_dns_servers(alias, servers)))

    if config.dns_suffix is not None:
        steps.append(TransitionStep("set DNS suffix", lambda: platform.set_dns_suffix(alias, config.dns_suffix)))

    return steps


def plan_dhcp_transition(
    platform: LinuxNetworkAccessor,
    snapshot: InterfaceSnapshot,
) -> list[TransitionStep]:
    """
    Ordered steps handing the interface over to DHCP.

    DHCP is enabled before the lease is released and renewed; a renew on an
    interface that still holds static addresses would have no effect.
    """
    alias = snapshot.alias
    return [
        TransitionStep("remove default route", lambda: platform.remove_default_route(alias)),
        TransitionStep("clear DNS suffix", lambda: platform.set_dns_suffix(alias, None)),
        TransitionStep("clear DNS servers", lambda: platform.set_dns_servers(alias, [])),
        TransitionStep("enable DHCP", lambda: platform.enable_dhcp(alias)),
        TransitionStep("release DHCP lease", lambda: platform.release_lease(alias)),
        TransitionStep("renew DHCP lease", lambda: platform.renew_lease(alias)),
    ]


def run_transition(steps: list[TransitionStep]) -> None:
    """
    Execute steps in order, stopping at the first failure.

    Raises:
        PlatformWriteError: From the failing step, unchanged
    """
    for number, step in enumerate(steps, start=1):
        logger.info("[%d/%d] %s", number, len(steps), step.name)
        try:
            step.action()
        except Exception:
            if number > 1:
                logger.warning(
                    "Stopped after %d of %d steps; interface may be partially configured",
                    number - 1, len(steps)
                )
            raise


# ============================================================================
# Writers
# ============================================================================

def apply_static(
    platform: LinuxNetworkAccessor,
    overrides: ConfigOverride,
    privilege_gate: Callable[[], bool] = is_elevated,
) -> InterfaceSnapshot:
    """
    Apply a static configuration to the default interface.

    Args:
        platform: Network accessor
        overrides: Fields to change; everything else is kept
        privilege_gate: Returns True if the caller may mutate the network

    Returns:
        Snapshot re-read after the change

    Raises:
        NoOverridesSpecified: overrides is empty (no platform call is made)
        PrivilegeRequired: Caller is not elevated (no platform call is made)
        MissingCommands: ip/resolvectl missing, or dhclient missing while
            the interface holds a DHCP lease
        NoRouteFound: No default interface
        ConfigurationError: Merged configuration cannot be applied
        PlatformWriteError: An underlying command failed
    """
    if overrides.is_empty():
        raise NoOverridesSpecified()
    if not privilege_gate():
        raise PrivilegeRequired()
    platform.require_commands(REQUIRED_COMMANDS)

    index = resolve_default_interface(platform)
    snapshot = read_snapshot(platform, index)
    if snapshot.mode == AddressingMode.DHCP:
        platform.require_commands(DHCP_COMMANDS)

    config = merge_overrides(snapshot, overrides)
    validate_static_config(config)
    logger.info(
        "Applying static configuration to %s (changed: %s)",
        sanitize_for_log(snapshot.alias), ", ".join(overrides.set_fields())
    )

    run_transition(plan_static_transition(platform, snapshot, config))
    return read_snapshot(platform, index)


def apply_dhcp(
    platform: LinuxNetworkAccessor,
    privilege_gate: Callable[[], bool] = is_elevated,
) -> InterfaceSnapshot:
    """
    Switch the default interface to DHCP and renew its lease.

    Returns:
        Snapshot re-read after the renew

    Raises:
        PrivilegeRequired: Caller is not elevated (no platform call is made)
        MissingCommands: ip, resolvectl or dhclient is not installed
        NoRouteFound: No default interface
        PlatformWriteError: An underlying command failed
    """
    if not privilege_gate():
        raise PrivilegeRequired()
    platform.require_commands(REQUIRED_COMMANDS + DHCP_COMMANDS)

    index = resolve_default_interface(platform)
    snapshot = read_snapshot(platform, index)
    logger.info("Renewing DHCP configuration of %s", sanitize_for_log(snapshot.alias))

    run_transition(plan_dhcp_transition(platform, snapshot))
    return read_snapshot(platform, index)
