"""
Centralized configuration for ifdefault.

All constants, command names, and display settings are defined here.
This ensures a single source of truth and makes the tool easy to maintain.

Requires:
    - Linux with iproute2 (JSON output, ``ip -j``)
    - systemd-resolved (resolvectl)
    - ISC dhclient for DHCP release/renew
    - Python 3.10+
"""

# ============================================================================
# System Dependencies
# ============================================================================

# Needed for every action
REQUIRED_COMMANDS = ["ip", "resolvectl"]

# Needed only when dhclient is driven: --dhcp, or --static on a leased interface
DHCP_COMMANDS = ["dhclient"]

# Timeout for external commands (seconds)
TIMEOUT_SECONDS = 10

# ============================================================================
# Route / Interface Detection
# ============================================================================

# Destination of the IPv4 default route as reported by `ip -j route`
DEFAULT_ROUTE_DESTINATION = "default"

# Kernel default when a route carries no explicit metric
DEFAULT_ROUTE_METRIC = 0

# Operational states treated as "connected"
CONNECTED_OPERSTATES = {"UP"}

# Tunnels (wg, tun) report UNKNOWN; they count as connected with carrier
CARRIER_FLAG = "LOWER_UP"
UNKNOWN_OPERSTATE = "UNKNOWN"

# ============================================================================
# Egress Lookup
# ============================================================================

IPINFO_URL = "https://ipinfo.io/json"

RETRY_ATTEMPTS = 3
RETRY_BACKOFF_FACTOR = 1.0

# ============================================================================
# Display Configuration
# ============================================================================

# Snapshot table rows: (label, snapshot attribute)
TABLE_ROWS = [
    ("Interface", "alias"),
    ("Index", "index"),
    ("Mode", "mode"),
    ("IP Address", "ip_address"),
    ("Gateway", "gateway"),
    ("CIDR", "prefix_length"),
    ("DNS", "dns_primary"),
    ("Alt DNS", "dns_secondary"),
    ("DNS Suffix", "dns_suffix"),
]

# Extra rows shown with --egress
EGRESS_ROWS = [
    ("External IP", "external_ip"),
    ("ISP", "isp"),
    ("Country", "country"),
]

TABLE_TITLE = "Default Interface"

# Separator between label and value columns
COLUMN_SEPARATOR = " : "

# ============================================================================
# Messages and Exit Codes
# ============================================================================

PRIVILEGE_ADVISORY = (
    "Changing the network configuration requires root privileges. "
    "Re-run with sudo to apply changes."
)

EXIT_OK = 0
EXIT_FAILURE = 1
EXIT_USAGE = 2
