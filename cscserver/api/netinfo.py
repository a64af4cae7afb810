"""Local network addresses for the startup banner."""

from __future__ import annotations

import socket
from typing import List, Tuple

import psutil


def local_ipv4_addresses() -> List[Tuple[str, str]]:
    """(interface, address) pairs for non-loopback IPv4 interfaces."""
    out: List[Tuple[str, str]] = []
    for name, addrs in psutil.net_if_addrs().items():
        for addr in addrs:
            if addr.family != socket.AF_INET:
                continue
            if addr.address.startswith("127."):
                continue
            out.append((name, addr.address))
    return out


def startup_banner(port: int, environment: str) -> List[str]:
    lines = [
        "=" * 60,
        "CSC API Server is running!",
        "=" * 60,
        f"Port: {port}",
        f"Environment: {environment}",
        "Access the API at:",
        f"   Local:    http://localhost:{port}",
        f"   Network:  http://127.0.0.1:{port}",
    ]
    ips = local_ipv4_addresses()
    if ips:
        lines.append("Connect from other devices using:")
        lines.extend(f"   http://{ip}:{port}  ({name})" for name, ip in ips)
    else:
        lines.append("No network interfaces found. Using localhost only.")
    lines.extend([
        "Available endpoints:",
        f"   Health:   http://localhost:{port}/health",
        f"   Email:    http://localhost:{port}/api/email",
        "=" * 60,
    ])
    return lines
