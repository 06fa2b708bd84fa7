#!/usr/bin/env python3
"""
ifdefault - Default Interface Configuration Tool

Shows and changes the IPv4 configuration of the interface that carries the
host's default route. Without options it prints the current configuration;
--static replaces selected settings, --dhcp hands the interface to DHCP.
"""

import sys
import argparse
from pathlib import Path
from typing import Optional

from logging_config import setup_logging, get_logger
from config import PRIVILEGE_ADVISORY, EXIT_OK, EXIT_FAILURE, EXIT_USAGE
from enums import Action
from errors import (
    IfDefaultError,
    PrivilegeRequired,
    NoOverridesSpecified,
    ConfigurationError,
)
from models import ConfigOverride
from orchestrator import run_action
from display import format_output
from export import export_to_json, export_to_csv, save_json, save_csv
from network.egress import get_egress_info
from utils.system import is_valid_ipv4, validate_dns_suffix

logger = get_logger(__name__)


# ============================================================================
# Argument Types
# ============================================================================

def ipv4_address(value: str) -> str:
    """argparse type: dotted-quad IPv4 address."""
    if not is_valid_ipv4(value):
        raise argparse.ArgumentTypeError(f"'{value}' is not a valid IPv4 address")
    return value


def prefix_length(value: str) -> int:
    """argparse type: prefix length 0-32 (a leading '/' is accepted)."""
    try:
        prefix = int(value.lstrip("/"))
    except ValueError:
        raise argparse.ArgumentTypeError(f"'{value}' is not a prefix length") from None
    if not 0 <= prefix <= 32:
        raise argparse.ArgumentTypeError(f"Prefix length must be 0-32, got {prefix}")
    return prefix


def dns_suffix(value: str) -> str:
    """argparse type: DNS search domain."""
    if not validate_dns_suffix(value):
        raise argparse.ArgumentTypeError(f"'{value}' is not a valid DNS suffix")
    return value


# ============================================================================
# Argument Parsing
# ============================================================================

def normalize_flags(argv: list[str]) -> list[str]:
    """
    Lower-case long option names so --Static and --STATIC work.

    Option values (after '=' or as separate tokens) are left untouched.
    """
    normalized = []
    for token in argv:
        if token.startswith("--"):
            name, sep, value = token.partition("=")
            token = name.lower() + sep + value
        normalized.append(token)
    return normalized


def parse_arguments(argv: Optional[list[str]] = None) -> argparse.Namespace:
    """
    Parse command line arguments.

    Args:
        argv: Arguments without program name (default: sys.argv[1:])

    Returns:
        Parsed arguments namespace
    """
    parser = argparse.ArgumentParser(
        prog='ifdefault',
        description='Show or change the IPv4 configuration of the default network interface',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog='''
Examples:
  %(prog)s                                   # Show current configuration
  %(prog)s --static --ip-address 192.168.1.10 --cidr 24
  %(prog)s --set --gateway 192.168.1.254     # Change only the gateway
  %(prog)s --static --dns 1.1.1.1 --alt-dns 9.9.9.9 --suffix corp.example
  %(prog)s --dhcp                            # Switch to DHCP and renew lease
  %(prog)s --egress                          # Also show public IP and ISP
  %(prog)s --export json --output if.json    # Save configuration as JSON

Changing the configuration requires root privileges.
        '''
    )

    mode = parser.add_mutually_exclusive_group()
    mode.add_argument(
        '--static', '--set',
        dest='action',
        action='store_const',
        const=Action.STATIC,
        help='Apply static settings given by the options below'
    )
    mode.add_argument(
        '--dhcp', '--renew',
        dest='action',
        action='store_const',
        const=Action.DHCP,
        help='Switch to DHCP and renew the lease (static options are ignored)'
    )

    static = parser.add_argument_group('static settings')
    static.add_argument('--ip-address', type=ipv4_address, metavar='IP', help='IPv4 address')
    static.add_argument('--gateway', type=ipv4_address, metavar='IP', help='Default gateway')
    static.add_argument('--cidr', type=prefix_length, metavar='BITS', help='Prefix length (0-32)')
    static.add_argument('--dns', type=ipv4_address, metavar='IP', help='Primary DNS server')
    static.add_argument('--alt-dns', type=ipv4_address, metavar='IP', help='Secondary DNS server')
    static.add_argument('--suffix', type=dns_suffix, metavar='DOMAIN', help='Connection-specific DNS suffix')

    parser.add_argument(
        '--egress',
        action='store_true',
        help='Query ipinfo.io for the public IP, ISP and country'
    )

    parser.add_argument(
        '--export',
        choices=['json', 'csv'],
        help='Export data in specified format (json or csv)'
    )

    parser.add_argument(
        '--output',
        type=Path,
        help='Output file for export (default: stdout)'
    )

    parser.add_argument(
        '-v', '--verbose',
        action='store_true',
        help='Enable verbose output with detailed progress information'
    )

    parser.add_argument(
        '--log-file',
        type=Path,
        help='Write logs to specified file'
    )

    parser.add_argument(
        '--no-color',
        action='store_true',
        help='Disable colored log output'
    )

    parser.set_defaults(action=Action.STATUS)

    if argv is None:
        argv = sys.argv[1:]
    return parser.parse_args(normalize_flags(argv))


def overrides_from_args(args: argparse.Namespace) -> ConfigOverride:
    """Collect the static settings given on the command line."""
    return ConfigOverride(
        ip_address=args.ip_address,
        gateway=args.gateway,
        prefix_length=args.cidr,
        dns_primary=args.dns,
        dns_secondary=args.alt_dns,
        dns_suffix=args.suffix,
    )


# ============================================================================
# Entry Point
# ============================================================================

def main(argv: Optional[list[str]] = None) -> int:
    """
    Main entry point.

    Returns:
        Process exit code
    """
    args = parse_arguments(argv)

    if args.output and not args.export:
        print("Error: --output requires --export", file=sys.stderr)
        return EXIT_USAGE

    setup_logging(
        verbose=args.verbose,
        log_file=args.log_file,
        use_colors=not args.no_color
    )

    logger.info("ifdefault starting")

    try:
        snapshot = run_action(args.action, overrides_from_args(args))
    except PrivilegeRequired:
        print(PRIVILEGE_ADVISORY)
        return EXIT_OK
    except (NoOverridesSpecified, ConfigurationError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_USAGE
    except IfDefaultError as e:
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_FAILURE

    egress = get_egress_info() if args.egress else None

    try:
        if args.export == 'json':
            if args.output:
                save_json(snapshot, str(args.output), egress)
                logger.info("JSON exported to %s", args.output)
            else:
                print(export_to_json(snapshot, egress))
        elif args.export == 'csv':
            if args.output:
                save_csv(snapshot, str(args.output), egress)
                logger.info("CSV exported to %s", args.output)
            else:
                print(export_to_csv(snapshot, egress), end="")
        else:
            print()
            format_output(snapshot, egress)
            print()
    except OSError as e:
        print(f"Error: cannot write {args.output}: {e.strerror or e}", file=sys.stderr)
        return EXIT_FAILURE

    logger.info("ifdefault completed successfully")
    return EXIT_OK


if __name__ == "__main__":
    sys.exit(main())
