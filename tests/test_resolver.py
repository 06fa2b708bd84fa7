"""Tests for network.resolver - default interface selection."""

import pytest

from errors import NoRouteFound
from models import InterfaceCandidate
from network.resolver import (
    metric_table,
    select_default_interface,
    gather_candidates,
    resolve_default_interface,
)
from fakes import FakeInterface, FakePlatform


class TestSelectDefaultInterface:
    """Tests for the pure selection function."""

    def test_single_candidate_returned_as_is(self) -> None:
        """A lone default route owner wins even if down and without IPv4."""
        candidate = InterfaceCandidate(index=4, metric=9999, connected=False, ipv4=False)

        assert select_default_interface([candidate]) == 4

    def test_lowest_metric_wins(self) -> None:
        """Three connected IPv4 owners: the lowest metric is chosen."""
        candidates = [
            InterfaceCandidate(index=5, metric=35),
            InterfaceCandidate(index=8, metric=10),
            InterfaceCandidate(index=12, metric=25),
        ]

        assert select_default_interface(candidates) == 8

    def test_disconnected_interface_never_wins(self) -> None:
        """Lowest metric is ignored when the link is down."""
        candidates = [
            InterfaceCandidate(index=5, metric=1, connected=False),
            InterfaceCandidate(index=8, metric=50),
        ]

        assert select_default_interface(candidates) == 8

    def test_interface_without_ipv4_never_wins(self) -> None:
        """Lowest metric is ignored when the interface has no IPv4 address."""
        candidates = [
            InterfaceCandidate(index=5, metric=1, ipv4=False),
            InterfaceCandidate(index=8, metric=50),
        ]

        assert select_default_interface(candidates) == 8

    def test_tie_broken_by_lowest_index(self) -> None:
        """Equal metrics resolve to the lowest index regardless of order."""
        candidates = [
            InterfaceCandidate(index=9, metric=10),
            InterfaceCandidate(index=3, metric=10),
            InterfaceCandidate(index=6, metric=20),
        ]

        assert select_default_interface(candidates) == 3
        assert select_default_interface(list(reversed(candidates))) == 3

    def test_no_candidates(self) -> None:
        """No default route owner raises NoRouteFound."""
        with pytest.raises(NoRouteFound):
            select_default_interface([])

    def test_all_filtered(self) -> None:
        """Several owners, none usable, raises NoRouteFound."""
        candidates = [
            InterfaceCandidate(index=5, metric=1, connected=False),
            InterfaceCandidate(index=8, metric=2, ipv4=False),
        ]

        with pytest.raises(NoRouteFound):
            select_default_interface(candidates)


class TestMetricTable:
    """Tests for metric_table."""

    def test_only_eligible_entries(self) -> None:
        """Filtered candidates are absent from the mapping."""
        table = metric_table([
            InterfaceCandidate(index=1, metric=5),
            InterfaceCandidate(index=2, metric=1, connected=False),
        ])

        assert dict(table) == {1: 5}

    def test_mapping_is_read_only(self) -> None:
        """The mapping cannot be mutated."""
        table = metric_table([InterfaceCandidate(index=1, metric=5)])

        with pytest.raises(TypeError):
            table[2] = 3  # type: ignore[index]


class TestGatherCandidates:
    """Tests for platform queries during resolution."""

    def test_single_owner_skips_metric_and_state(self) -> None:
        """With one owner, no metric/connection/family query is made."""
        platform = FakePlatform(
            FakeInterface(index=2, alias="eth0", gateway="10.0.0.1", ip_address="10.0.0.5"),
        )

        candidates = gather_candidates(platform)

        assert [c.index for c in candidates] == [2]
        assert platform.method_names == ["default_route_interfaces"]

    def test_multiple_owners_query_each(self) -> None:
        """Every owner is queried for metric, link state and IPv4."""
        platform = FakePlatform(
            FakeInterface(index=2, alias="eth0", metric=100, gateway="10.0.0.1", ip_address="10.0.0.5"),
            FakeInterface(index=3, alias="wlan0", metric=600, gateway="10.0.1.1", connected=False),
        )

        candidates = gather_candidates(platform)

        assert candidates == [
            InterfaceCandidate(index=2, metric=100, connected=True, ipv4=True),
            InterfaceCandidate(index=3, metric=600, connected=False, ipv4=False),
        ]


class TestResolveDefaultInterface:
    """Tests for resolve_default_interface."""

    def test_scenario_three_interfaces(self) -> None:
        """Metrics {5: 35, 8: 10, 12: 25}, all usable: interface 8."""
        platform = FakePlatform(
            FakeInterface(index=5, alias="eth0", metric=35, gateway="10.0.0.1", ip_address="10.0.0.5"),
            FakeInterface(index=8, alias="eth1", metric=10, gateway="10.0.1.1", ip_address="10.0.1.5"),
            FakeInterface(index=12, alias="wlan0", metric=25, gateway="10.0.2.1", ip_address="10.0.2.5"),
        )

        assert resolve_default_interface(platform) == 8

    def test_no_default_route(self) -> None:
        """An empty route table raises NoRouteFound."""
        platform = FakePlatform(FakeInterface(index=2, alias="eth0"))

        with pytest.raises(NoRouteFound):
            resolve_default_interface(platform)

    def test_reresolves_every_call(self) -> None:
        """A moved default route is picked up on the next call."""
        platform = FakePlatform(
            FakeInterface(index=2, alias="eth0", gateway="10.0.0.1", ip_address="10.0.0.5"),
            FakeInterface(index=3, alias="wlan0", gateway="10.0.1.1", ip_address="10.0.1.5"),
            default_owners=[2],
        )
        assert resolve_default_interface(platform) == 2

        platform.default_owners = [3]

        assert resolve_default_interface(platform) == 3
