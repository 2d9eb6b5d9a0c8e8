"""Network helpers."""

from __future__ import annotations

import socket

_WILDCARD_TO_LOOPBACK = {
    "0.0.0.0": "127.0.0.1",
    "::": "::1",
}


def find_free_port() -> int:
    """Ask the OS for a currently unused TCP port."""
    with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as sock:
        sock.bind(("", 0))
        return sock.getsockname()[1]


def connectable_host(address: str) -> str:
    """Map a wildcard bind address to the loopback address clients can reach."""
    return _WILDCARD_TO_LOOPBACK.get(address, address)


def format_host(host: str) -> str:
    """Bracket IPv6 literals for use in URLs."""
    if ":" in host and not host.startswith("["):
        return f"[{host}]"
    return host


def is_port_open(host: str, port: int, timeout: float = 1.0) -> bool:
    """Return True if a TCP connection to host:port succeeds."""
    try:
        with socket.create_connection((host, port), timeout=timeout):
            return True
    except OSError:
        return False
