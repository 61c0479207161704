"""
Validation Utilities Module
Input validation functions for the geolocation service
"""

import ipaddress


def is_valid_ip(address):
    """
    Validate if string is a valid IP address (IPv4 or IPv6)

    Args:
        address: String to validate

    Returns:
        Boolean indicating if valid IP address

    Example:
        >>> is_valid_ip("8.8.8.8")
        True
        >>> is_valid_ip("256.1.1.1")
        False
        >>> is_valid_ip("2001:4860:4860::8888")
        True
    """
    if not isinstance(address, str):
        return False
    try:
        ipaddress.ip_address(address)
        return True
    except ValueError:
        return False


def normalize_ip(address):
    """
    Return the canonical text form of an IP address

    Different spellings of one address ("2001:DB8::0001" and "2001:db8::1")
    map to the same string, which is what the cache is keyed by.

    Args:
        address: IP address string

    Returns:
        Canonical IP string or None if invalid

    Example:
        >>> normalize_ip("2001:DB8:0:0::1")
        '2001:db8::1'
        >>> normalize_ip("not-an-ip") is None
        True
    """
    if not is_valid_ip(address):
        return None
    return str(ipaddress.ip_address(address))
