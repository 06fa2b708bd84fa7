"""
Default interface resolution.

Picks the single interface the host uses to reach 0.0.0.0/0.

With one default route owner the answer is immediate. With several, only
interfaces that are connected and carry IPv4 are eligible, and the lowest
route metric wins. Equal metrics are broken by the lowest interface index
so the result never depends on enumeration order.

Resolution runs on every request; the default route may move between runs.
"""

from types import MappingProxyType
from typing import Iterable, Mapping

from logging_config import get_logger
from errors import NoRouteFound
from models import InterfaceCandidate
from network.platform import LinuxNetworkAccessor

logger = get_logger(__name__)


def metric_table(candidates: Iterable[InterfaceCandidate]) -> Mapping[int, int]:
    """
    Immutable index -> metric mapping over eligible candidates.

    A candidate is eligible when it is both connected and IPv4-capable.
    """
    return MappingProxyType({
        candidate.index: candidate.metric
        for candidate in candidates
        if candidate.connected and candidate.ipv4
    })


def select_default_interface(candidates: list[InterfaceCandidate]) -> int:
    """
    Choose the default interface among the default route owners.

    Args:
        candidates: One entry per interface owning a default route

    Returns:
        Interface index

    Raises:
        NoRouteFound: No candidate, or none connected with IPv4

    Examples:
        >>> select_default_interface([
        ...     InterfaceCandidate(5, 35), InterfaceCandidate(8, 10), InterfaceCandidate(12, 25)
        ... ])
        8
    """
    if not candidates:
        raise NoRouteFound()

    if len(candidates) == 1:
        return candidates[0].index

    metrics = metric_table(candidates)
    if not metrics:
        raise NoRouteFound("No connected IPv4 interface owns the default route")

    return min(metrics, key=lambda index: (metrics[index], index))


def gather_candidates(platform: LinuxNetworkAccessor) -> list[InterfaceCandidate]:
    """
    Query the platform for every default route owner.

    A lone owner is returned without metric or link state lookups.
    """
    indices = platform.default_route_interfaces()
    if len(indices) <= 1:
        return [InterfaceCandidate(index=index, metric=0) for index in indices]

    candidates = []
    for index in indices:
        candidate = InterfaceCandidate(
            index=index,
            metric=platform.interface_metric(index),
            connected=platform.is_connected(index),
            ipv4=platform.has_ipv4(index),
        )
        logger.debug(
            "Candidate %d: metric=%d connected=%s ipv4=%s",
            candidate.index, candidate.metric, candidate.connected, candidate.ipv4
        )
        candidates.append(candidate)
    return candidates


def resolve_default_interface(platform: LinuxNetworkAccessor) -> int:
    """
    Resolve the index of the host's default interface.

    Raises:
        NoRouteFound: No usable interface owns the default route
    """
    logger.debug("Querying default route owners")
    index = select_default_interface(gather_candidates(platform))
    logger.info("Default interface index: %d", index)
    return index
