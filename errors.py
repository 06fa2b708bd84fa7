"""
Error taxonomy for ifdefault.

Every error is terminal for the current invocation. None is retried.
The orchestrator maps each class to an exit code and a one-line message.
"""

from typing import Optional


class IfDefaultError(Exception):
    """Base class for all errors reported to the user."""


class NoRouteFound(IfDefaultError):
    """No usable interface owns the IPv4 default route."""

    def __init__(self, message: str = "No default route found") -> None:
        super().__init__(message)


class PrivilegeRequired(IfDefaultError):
    """A mutating operation was requested without root privileges."""

    def __init__(self, message: str = "Root privileges required") -> None:
        super().__init__(message)


class NoOverridesSpecified(IfDefaultError):
    """Static configuration was requested without any field to change."""

    def __init__(
        self,
        message: str = (
            "No static settings given. Use --ip-address, --gateway, --cidr, "
            "--dns, --alt-dns or --suffix"
        ),
    ) -> None:
        super().__init__(message)


class ConfigurationError(IfDefaultError):
    """The merged configuration cannot be applied (e.g. no IPv4 address)."""


class PlatformWriteError(IfDefaultError):
    """
    An underlying configuration command failed.

    Attributes:
        step: Name of the transition step that failed
        detail: Raw error text from the failing command, unmodified
    """

    def __init__(self, step: str, detail: Optional[str]) -> None:
        self.step = step
        self.detail = detail or "unknown error"
        super().__init__(f"{step} failed: {self.detail}")


class MissingCommands(IfDefaultError):
    """System commands needed by the requested action are not installed."""

    def __init__(self, commands: list[str]) -> None:
        self.commands = list(commands)
        super().__init__(f"missing required commands: {', '.join(self.commands)}")
