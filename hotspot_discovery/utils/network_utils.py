"""
Network utility functions for address validation and name resolution.

This module provides helper functions shared by the scanners: IPv4 and
hardware-address checks, and the two hostname lookups used to give
discovered devices a display name.
"""

import ipaddress
import socket
from typing import List

ZERO_MAC = "00:00:00:00:00:00"
MAC_SEPARATOR = ":"


def is_valid_ip(ip_address: str) -> bool:
    """
    Check if a string represents a valid IPv4 address.

    Args:
        ip_address: String to validate as IPv4 address

    Returns:
        bool: True if valid IPv4 address, False otherwise
    """
    try:
        ipaddress.IPv4Address(ip_address)
        return True
    except ipaddress.AddressValueError:
        return False


def is_usable_mac(mac_address: str) -> bool:
    """
    Check whether a neighbor-table hardware address identifies a real peer.

    The all-zero address marks an incomplete or stale entry, and a value
    without a separator is not a hardware address at all (e.g. a state
    keyword that slid into the lladdr position).
    """
    if not mac_address:
        return False
    if mac_address == ZERO_MAC:
        return False
    return MAC_SEPARATOR in mac_address


def normalize_mac(mac_address: str) -> str:
    """Uppercase a hardware address, keeping its colon separators."""
    return mac_address.upper()


def resolve_hostname(ip_address: str) -> str:
    """
    Reverse-resolve an address to a hostname.

    Args:
        ip_address: IP address to resolve

    Returns:
        str: Hostname if resolution succeeded, the address itself otherwise
    """
    try:
        hostname = socket.gethostbyaddr(ip_address)[0]
    except (OSError, UnicodeError):
        return ip_address
    return hostname or ip_address


def resolve_display_name(ip_address: str) -> str:
    """
    Resolve the fully qualified name of a reachable address.

    socket.getfqdn() runs the reverse lookup and then prefers the first
    alias that contains a dot, which is the richest name a peer on a
    hotspot usually has.

    Args:
        ip_address: IP address to resolve

    Returns:
        str: Fully qualified name, or the address itself
    """
    try:
        hostname = socket.getfqdn(ip_address)
    except (OSError, UnicodeError):
        return ip_address
    return hostname or ip_address


def expand_prefix(prefix: str, first_host: int, last_host: int) -> List[str]:
    """
    Build the addresses prefix+first_host .. prefix+last_host inclusive.

    Args:
        prefix: Dotted prefix ending with a dot (e.g. "192.168.43.")
        first_host: First host suffix
        last_host: Last host suffix (inclusive)

    Returns:
        List[str]: Addresses in ascending suffix order
    """
    return [f"{prefix}{suffix}" for suffix in range(first_host, last_host + 1)]
