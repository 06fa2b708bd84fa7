"""
System utilities module.

Provides command execution, input validation, log sanitization and the
privilege check used to gate mutating operations.

Security:
    Commands are executed without a shell. Interface names are validated
    before they are placed on a command line.
"""

import ipaddress
import os
import re
import subprocess
from dataclasses import dataclass
from functools import cache
from typing import Any, Optional

from config import TIMEOUT_SECONDS


# ============================================================================
# Input Validation
# ============================================================================

# Regex for valid interface names (systemd + traditional naming)
# Allows: letters, digits, hyphens, underscores, dots, colons
VALID_INTERFACE_NAME = re.compile(r'^[a-zA-Z0-9._:-]+$')

# Search domains: labels of letters, digits and hyphens separated by dots
VALID_DNS_SUFFIX = re.compile(
    r'^(?=.{1,253}$)([a-zA-Z0-9]([a-zA-Z0-9-]{0,61}[a-zA-Z0-9])?)'
    r'(\.[a-zA-Z0-9]([a-zA-Z0-9-]{0,61}[a-zA-Z0-9])?)*\.?$'
)


def validate_interface_name(name: str) -> bool:
    """
    Validate interface name to prevent command injection.

    Rejects shell metacharacters, path separators and newlines.
    Allows standard interface names: eth0, wlp8s0, tun0, enx9a5ad1b02596

    Args:
        name: Interface name to validate

    Returns:
        True if valid interface name, False otherwise
    """
    if not name or len(name) > 64 or '\n' in name or '\r' in name:
        return False
    return bool(VALID_INTERFACE_NAME.match(name))


def validate_dns_suffix(suffix: str) -> bool:
    """True if suffix is a syntactically valid DNS domain name."""
    return bool(suffix) and bool(VALID_DNS_SUFFIX.match(suffix))


@cache
def is_valid_ipv4(address: str) -> bool:
    """
    Validate if string is a valid dotted-quad IPv4 address.

    Leading zeros are rejected (ipaddress treats them as ambiguous).

    Args:
        address: String to validate

    Returns:
        True if valid IPv4 address, False otherwise
    """
    if not address:
        return False
    try:
        ipaddress.IPv4Address(address)
    except ValueError:
        return False
    return True


# ============================================================================
# Log Sanitization
# ============================================================================

def sanitize_for_log(value: Any) -> str:
    """
    Sanitize values before logging to prevent log injection attacks.

    Order of operations:
    1. Replace newlines with spaces
    2. Remove ANSI escape sequences
    3. Remove other control characters
    4. Limit length

    Args:
        value: Any value to be logged

    Returns:
        Sanitized string safe for logging

    Examples:
        >>> sanitize_for_log("line1\\nline2")
        'line1 line2'
        >>> sanitize_for_log("\\x1b[31mred\\x1b[0m")
        'red'
    """
    if value is None:
        return "None"

    text = str(value)
    text = text.replace('\n', ' ').replace('\r', ' ')
    text = re.sub(r'\x1b\[[0-9;]*m', '', text)
    text = re.sub(r'[\x00-\x08\x0b-\x0c\x0e-\x1f\x7f-\x9f]', '', text)

    if len(text) > 200:
        text = text[:197] + "..."

    return text


# ============================================================================
# Command Execution
# ============================================================================

@dataclass
class CommandResult:
    """Outcome of an external command."""
    returncode: int
    stdout: str
    stderr: str

    @property
    def ok(self) -> bool:
        return self.returncode == 0


def execute(cmd: list[str]) -> CommandResult:
    """
    Execute a system command and capture its outcome.

    Never raises for command failures: a missing binary or a timeout is
    reported as a non-zero result whose stderr describes the problem.

    Security:
        - No shell=True (prevents shell injection)
        - Timeout protection

    Args:
        cmd: Command and arguments as list (not string)

    Returns:
        CommandResult with stripped stdout/stderr
    """
    try:
        result = subprocess.run(
            cmd,
            capture_output=True,
            text=True,
            check=False,
            timeout=TIMEOUT_SECONDS,
            shell=False
        )
    except subprocess.TimeoutExpired:
        return CommandResult(124, "", f"{cmd[0]}: timed out after {TIMEOUT_SECONDS}s")
    except FileNotFoundError:
        return CommandResult(127, "", f"{cmd[0]}: command not found")
    return CommandResult(result.returncode, result.stdout.strip(), result.stderr.strip())


def run_command(cmd: list[str]) -> Optional[str]:
    """
    Execute a read-only system command and return its output.

    Args:
        cmd: Command and arguments as list (not string)

    Returns:
        Command output as string, or None if command fails
    """
    result = execute(cmd)
    return result.stdout if result.ok else None


# ============================================================================
# Privilege Gate
# ============================================================================

def is_elevated() -> bool:
    """True if the process runs with an effective UID of root."""
    return os.geteuid() == 0
