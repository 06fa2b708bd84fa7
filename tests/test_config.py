"""
Tests for configuration constants.

Ensures that constants in config.py are defined consistently.
"""

from dataclasses import fields

from config import (
    REQUIRED_COMMANDS,
    DHCP_COMMANDS,
    TIMEOUT_SECONDS,
    IPINFO_URL,
    RETRY_ATTEMPTS,
    TABLE_ROWS,
    EGRESS_ROWS,
    PRIVILEGE_ADVISORY,
    EXIT_OK,
    EXIT_FAILURE,
    EXIT_USAGE,
)
from models import EgressInfo, InterfaceSnapshot


class TestCommands:
    """Test command lists."""

    def test_required_commands_content(self) -> None:
        """Test that all expected commands are present."""
        assert set(REQUIRED_COMMANDS) == {"ip", "resolvectl"}
        assert DHCP_COMMANDS == ["dhclient"]

    def test_no_duplicates(self) -> None:
        """Test that there are no duplicate commands."""
        commands = REQUIRED_COMMANDS + DHCP_COMMANDS
        assert len(commands) == len(set(commands))


class TestTimeouts:
    """Test timeout and retry settings."""

    def test_positive(self) -> None:
        """Test that timeout and retries are positive."""
        assert TIMEOUT_SECONDS > 0
        assert RETRY_ATTEMPTS >= 1

    def test_https(self) -> None:
        """Test that the egress API uses HTTPS."""
        assert IPINFO_URL.startswith("https://")


class TestTableRows:
    """Test display row definitions."""

    def test_rows_map_to_snapshot_fields(self) -> None:
        """Every snapshot row names a real snapshot attribute."""
        names = {f.name for f in fields(InterfaceSnapshot)}
        assert all(attr in names for _, attr in TABLE_ROWS)

    def test_egress_rows_map_to_egress_fields(self) -> None:
        """Every egress row names a real EgressInfo attribute."""
        names = {f.name for f in fields(EgressInfo)}
        assert all(attr in names for _, attr in EGRESS_ROWS)

    def test_labels_unique(self) -> None:
        """Test that labels are not repeated."""
        labels = [label for label, _ in TABLE_ROWS + EGRESS_ROWS]
        assert len(labels) == len(set(labels))


class TestMessages:
    """Test messages and exit codes."""

    def test_advisory_single_line(self) -> None:
        """The privilege advisory is one line."""
        assert "\n" not in PRIVILEGE_ADVISORY

    def test_exit_codes_distinct(self) -> None:
        """Test that exit codes differ."""
        assert len({EXIT_OK, EXIT_FAILURE, EXIT_USAGE}) == 3
