"""
Command orchestration module.

Connects the resolver, snapshot reader and writers for one invocation:
status reads, static and DHCP mutate and re-read. Every call resolves the
default interface afresh.

System commands are checked per action. Mutating actions check them only
after the privilege gate, so an unprivileged request always gets the
privilege advisory.
"""

from typing import Callable, Optional

from logging_config import get_logger
from config import REQUIRED_COMMANDS
from enums import Action
from models import ConfigOverride, InterfaceSnapshot
from network.platform import LinuxNetworkAccessor
from network.resolver import resolve_default_interface
from network.snapshot import read_snapshot
from network.writer import apply_static, apply_dhcp
from utils.system import is_elevated, sanitize_for_log

logger = get_logger(__name__)


def get_status(platform: LinuxNetworkAccessor) -> InterfaceSnapshot:
    """
    Resolve the default interface and read its configuration.

    Raises:
        MissingCommands: ip or resolvectl is not installed
        NoRouteFound: No default interface
    """
    platform.require_commands(REQUIRED_COMMANDS)
    return read_snapshot(platform, resolve_default_interface(platform))


def run_action(
    action: Action,
    overrides: Optional[ConfigOverride] = None,
    platform: Optional[LinuxNetworkAccessor] = None,
    privilege_gate: Callable[[], bool] = is_elevated,
) -> InterfaceSnapshot:
    """
    Perform one action and return the resulting snapshot.

    Args:
        action: STATUS, STATIC or DHCP
        overrides: Static settings (STATIC only)
        platform: Network accessor, a LinuxNetworkAccessor by default
        privilege_gate: Privilege check for mutating actions

    Returns:
        Current snapshot (after the change for mutating actions)

    Raises:
        IfDefaultError subclasses, see errors.py
    """
    platform = platform or LinuxNetworkAccessor()
    logger.info("Action: %s", action)

    if action == Action.STATIC:
        overrides = overrides or ConfigOverride()
        logger.debug("Overrides: %s", sanitize_for_log(overrides))
        return apply_static(platform, overrides, privilege_gate)

    if action == Action.DHCP:
        if overrides is not None and not overrides.is_empty():
            logger.debug("Ignoring static options with --dhcp: %s", ", ".join(overrides.set_fields()))
        return apply_dhcp(platform, privilege_gate)

    return get_status(platform)
