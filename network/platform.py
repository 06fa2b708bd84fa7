"""
Platform network accessor.

Thin wrapper around the Linux networking tools. Reads query the kernel via
iproute2's JSON output (``ip -j``) and systemd-resolved (``resolvectl``);
writes go through the same tools plus ISC ``dhclient``.

Every method issues its own command. Nothing is cached: the default route
can change between two calls and the OS is the only system of record.

Read failures are logged and reported as "unset" (None / empty list).
Write failures raise PlatformWriteError carrying the tool's stderr verbatim.
"""

import json
import shutil
from typing import Any, Optional

from logging_config import get_logger
from config import (
    DEFAULT_ROUTE_DESTINATION,
    DEFAULT_ROUTE_METRIC,
    CONNECTED_OPERSTATES,
    CARRIER_FLAG,
    UNKNOWN_OPERSTATE,
)
from errors import MissingCommands, NoRouteFound, PlatformWriteError
from utils.system import (
    execute,
    run_command,
    is_valid_ipv4,
    sanitize_for_log,
    validate_interface_name,
)

logger = get_logger(__name__)


# ============================================================================
# Output Parsing
# ============================================================================

def parse_ip_json(output: Optional[str]) -> list[dict[str, Any]]:
    """
    Parse the JSON document printed by ``ip -j``.

    Args:
        output: Raw command output, or None if the command failed

    Returns:
        List of objects, empty on missing or malformed output
    """
    if not output:
        return []
    try:
        data = json.loads(output)
    except json.JSONDecodeError as e:
        logger.warning("Could not parse ip output: %s", sanitize_for_log(str(e)))
        return []
    return [entry for entry in data if isinstance(entry, dict)] if isinstance(data, list) else []


def parse_resolvectl_values(output: Optional[str]) -> list[str]:
    """
    Extract the values from a per-link resolvectl line.

    Handles ``Link 2 (eth0): 8.8.8.8 1.1.1.1#one.one.one.one``.

    Args:
        output: Raw resolvectl output, or None if the command failed

    Returns:
        Whitespace separated tokens after the link header
    """
    if not output:
        return []
    values: list[str] = []
    for line in output.splitlines():
        if "):" in line:
            values.extend(line.split("):", 1)[1].split())
    return values


def parse_dns_servers(output: Optional[str]) -> list[str]:
    """
    IPv4 DNS servers from ``resolvectl dns <iface>`` in configured order.

    DNS-over-TLS server names (``#name``) are stripped; IPv6 entries are
    skipped.
    """
    servers: list[str] = []
    for token in parse_resolvectl_values(output):
        address = token.split("#", 1)[0]
        if is_valid_ipv4(address) and address not in servers:
            servers.append(address)
    return servers


def parse_dns_suffix(output: Optional[str]) -> Optional[str]:
    """
    First search domain from ``resolvectl domain <iface>``.

    Routing-only domains (``~example.com``, ``~.``) are not search suffixes.
    """
    for token in parse_resolvectl_values(output):
        if not token.startswith("~"):
            return token
    return None


def _route_metric(route: dict[str, Any]) -> int:
    metric = route.get("metric", DEFAULT_ROUTE_METRIC)
    try:
        return int(metric)
    except (TypeError, ValueError):
        return DEFAULT_ROUTE_METRIC


def _inet_entries(addresses: list[dict[str, Any]]) -> list[dict[str, Any]]:
    """IPv4 addr_info entries, global scope first."""
    entries = [
        info
        for entry in addresses
        for info in entry.get("addr_info", [])
        if info.get("family") == "inet"
    ]
    return sorted(entries, key=lambda info: info.get("scope") != "global")


# ============================================================================
# Accessor
# ============================================================================

class LinuxNetworkAccessor:
    """
    Route table, interface and resolver access for one host.

    Reads are keyed by interface index, writes by interface alias.
    """

    def require_commands(self, commands: list[str]) -> None:
        """
        Verify the system commands behind an operation are installed.

        Raises:
            MissingCommands: One or more commands are not on PATH
        """
        missing = []
        for cmd in commands:
            if shutil.which(cmd):
                logger.debug("Found: %s", cmd)
            else:
                missing.append(cmd)
        if missing:
            raise MissingCommands(missing)

    # -- Reads ----------------------------------------------------------------

    def _links(self) -> list[dict[str, Any]]:
        return parse_ip_json(run_command(["ip", "-j", "link", "show"]))

    def _link(self, index: int) -> dict[str, Any]:
        for link in self._links():
            if link.get("ifindex") == index:
                return link
        raise NoRouteFound(f"Interface index {index} no longer exists")

    def _default_routes(self) -> list[dict[str, Any]]:
        return [
            route
            for route in parse_ip_json(run_command(["ip", "-j", "-4", "route", "show", "default"]))
            if route.get("dst") == DEFAULT_ROUTE_DESTINATION and route.get("dev")
        ]

    def _addresses(self, alias: str) -> list[dict[str, Any]]:
        return parse_ip_json(run_command(["ip", "-j", "-4", "addr", "show", "dev", alias]))

    def default_route_interfaces(self) -> list[int]:
        """
        Indices of interfaces owning a 0.0.0.0/0 route, deduplicated.

        Order follows the kernel route table.
        """
        routes = self._default_routes()
        if not routes:
            logger.debug("No IPv4 default route in routing table")
            return []

        index_by_name = {
            link.get("ifname"): link.get("ifindex")
            for link in self._links()
        }

        indices: list[int] = []
        for route in routes:
            index = index_by_name.get(route["dev"])
            if index is None:
                logger.debug("Default route device %s not in link list", sanitize_for_log(route["dev"]))
                continue
            if index not in indices:
                indices.append(index)
        return indices

    def alias(self, index: int) -> str:
        """Interface name for an index."""
        name = self._link(index).get("ifname", "")
        if not validate_interface_name(name):
            raise NoRouteFound(f"Interface index {index} has an invalid name")
        return name

    def interface_metric(self, index: int) -> int:
        """Lowest metric among the interface's default routes."""
        alias = self.alias(index)
        metrics = [
            _route_metric(route)
            for route in self._default_routes()
            if route["dev"] == alias
        ]
        return min(metrics) if metrics else DEFAULT_ROUTE_METRIC

    def is_connected(self, index: int) -> bool:
        """True if the link is operationally up (or a tunnel with carrier)."""
        link = self._link(index)
        operstate = link.get("operstate", UNKNOWN_OPERSTATE)
        if operstate in CONNECTED_OPERSTATES:
            return True
        return operstate == UNKNOWN_OPERSTATE and CARRIER_FLAG in link.get("flags", [])

    def has_ipv4(self, index: int) -> bool:
        """True if the interface carries at least one IPv4 address."""
        return bool(_inet_entries(self._addresses(self.alias(index))))

    def dhcp_enabled(self, index: int) -> bool:
        """True if the interface's primary IPv4 address is a DHCP lease."""
        entries = _inet_entries(self._addresses(self.alias(index)))
        return bool(entries) and bool(entries[0].get("dynamic", False))

    def ipv4_address(self, index: int) -> Optional[tuple[str, int]]:
        """Primary IPv4 address and prefix length, or None."""
        entries = _inet_entries(self._addresses(self.alias(index)))
        if not entries:
            return None
        primary = entries[0]
        return primary["local"], int(primary["prefixlen"])

    def default_gateway(self, index: int) -> Optional[str]:
        """Next hop of the interface's default route, or None."""
        alias = self.alias(index)
        routes = parse_ip_json(
            run_command(["ip", "-j", "-4", "route", "show", "default", "dev", alias])
        )
        for route in sorted(routes, key=_route_metric):
            if route.get("gateway"):
                return route["gateway"]
        return None

    def dns_servers(self, index: int) -> list[str]:
        """Configured IPv4 DNS servers for the interface, in order."""
        return parse_dns_servers(run_command(["resolvectl", "dns", self.alias(index)]))

    def dns_suffix(self, index: int) -> Optional[str]:
        """Connection-specific DNS search domain, or None."""
        return parse_dns_suffix(run_command(["resolvectl", "domain", self.alias(index)]))

    # -- Writes ---------------------------------------------------------------

    def _write(self, step: str, cmd: list[str]) -> None:
        logger.debug("%s: %s", step, sanitize_for_log(" ".join(cmd)))
        result = execute(cmd)
        if not result.ok:
            detail = result.stderr or result.stdout or f"exit status {result.returncode}"
            logger.debug("%s failed: %s", step, sanitize_for_log(detail))
            raise PlatformWriteError(step, detail)

    def remove_default_route(self, alias: str) -> None:
        self._write("remove default route", ["ip", "-4", "route", "del", "default", "dev", alias])

    def remove_addresses(self, alias: str) -> None:
        self._write("remove IPv4 addresses", ["ip", "-4", "addr", "flush", "dev", alias])

    def add_address(self, alias: str, ip_address: str, prefix_length: int) -> None:
        self._write(
            "add IPv4 address",
            ["ip", "-4", "addr", "add", f"{ip_address}/{prefix_length}", "dev", alias],
        )

    def add_default_route(self, alias: str, gateway: str) -> None:
        self._write(
            "add default route",
            ["ip", "-4", "route", "add", "default", "via", gateway, "dev", alias],
        )

    def set_dns_servers(self, alias: str, servers: list[str]) -> None:
        """Replace the link's DNS servers; an empty list clears them."""
        self._write("set DNS servers", ["resolvectl", "dns", alias, *(servers or [""])])

    def set_dns_suffix(self, alias: str, suffix: Optional[str]) -> None:
        """Replace the link's search domain; None clears it."""
        self._write("set DNS suffix", ["resolvectl", "domain", alias, suffix or ""])

    def stop_dhcp(self, alias: str) -> None:
        """Stop the DHCP client without releasing the lease."""
        self._write("stop DHCP client", ["dhclient", "-x", alias])

    def enable_dhcp(self, alias: str) -> None:
        """Drop manually assigned addresses so the interface is DHCP-managed."""
        self._write("enable DHCP", ["ip", "-4", "addr", "flush", "dev", alias, "permanent"])

    def release_lease(self, alias: str) -> None:
        self._write("release DHCP lease", ["dhclient", "-r", alias])

    def renew_lease(self, alias: str) -> None:
        self._write("renew DHCP lease", ["dhclient", "-1", alias])
