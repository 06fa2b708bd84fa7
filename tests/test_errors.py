"""Tests for the error taxonomy."""

from errors import (
    IfDefaultError,
    NoRouteFound,
    PrivilegeRequired,
    NoOverridesSpecified,
    ConfigurationError,
    PlatformWriteError,
    MissingCommands,
)


class TestErrors:
    """Test error classes."""

    def test_common_base(self) -> None:
        """Every error derives from IfDefaultError."""
        for cls in (NoRouteFound, PrivilegeRequired, NoOverridesSpecified, ConfigurationError):
            assert issubclass(cls, IfDefaultError)
        assert isinstance(PlatformWriteError("step", "detail"), IfDefaultError)

    def test_default_messages(self) -> None:
        """Errors without arguments carry a readable message."""
        assert str(NoRouteFound()) == "No default route found"
        assert "--ip-address" in str(NoOverridesSpecified())

    def test_platform_write_error_keeps_detail(self) -> None:
        """The raw detail is kept unchanged and shown in the message."""
        error = PlatformWriteError("add default route", "RTNETLINK answers: Network is unreachable")

        assert error.step == "add default route"
        assert error.detail == "RTNETLINK answers: Network is unreachable"
        assert str(error) == "add default route failed: RTNETLINK answers: Network is unreachable"

    def test_platform_write_error_without_detail(self) -> None:
        """Missing detail is replaced by a placeholder."""
        assert PlatformWriteError("enable DHCP", None).detail == "unknown error"

    def test_missing_commands_single_line(self) -> None:
        """All missing commands are named in one message."""
        error = MissingCommands(["resolvectl", "dhclient"])

        assert error.commands == ["resolvectl", "dhclient"]
        assert str(error) == "missing required commands: resolvectl, dhclient"
        assert isinstance(error, IfDefaultError)
