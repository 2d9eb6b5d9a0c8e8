"""
Bind address validation.

The server accepts IPv4 and IPv6 literals only; host names are rejected.
"""

from __future__ import annotations

import ipaddress
from collections.abc import Callable

from .exceptions import InvalidArgumentError

DEFAULT_LOCAL_IP_ADDRESS = "0.0.0.0"


def _is_valid(check: Callable[[str], object], address: str) -> bool:
    try:
        check(address)
    except ValueError:
        return False
    return True


# Generic, IPv4 and IPv6 checks. An address passing any one of them is valid.
_ADDRESS_CHECKS: tuple[Callable[[str], object], ...] = (
    ipaddress.ip_address,
    ipaddress.IPv4Address,
    ipaddress.IPv6Address,
)


def is_valid_address(address: str) -> bool:
    """Return True if address is an IPv4 or IPv6 literal."""
    return any(_is_valid(check, address) for check in _ADDRESS_CHECKS)


def validate_address(address: str | None) -> str:
    """
    Validate a bind address.

    Args:
        address: Candidate address (may be blank)

    Returns:
        The address unchanged, or DEFAULT_LOCAL_IP_ADDRESS when blank

    Raises:
        InvalidArgumentError: If the address is not a valid IP literal
    """
    if address is None or not address.strip():
        return DEFAULT_LOCAL_IP_ADDRESS
    if not is_valid_address(address):
        raise InvalidArgumentError(
            f"The invalid IP address {address} is defined",
            argument="address",
            value=address,
        )
    return address
