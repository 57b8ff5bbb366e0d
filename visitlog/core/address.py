"""Client address resolution from proxy headers."""

from typing import Mapping, Optional

from fastapi import Request

UNKNOWN_ADDRESS = "Unknown"

# Checked in order after X-Forwarded-For
SINGLE_IP_HEADERS = (
    "x-real-ip",
    "cf-connecting-ip",
    "fastly-client-ip",
    "x-cluster-client-ip",
)


def _header(headers: Mapping[str, str], name: str) -> str:
    value = headers.get(name)
    if value is None:
        # Plain dicts are case-sensitive; Starlette headers are not
        for key, candidate in headers.items():
            if key.lower() == name:
                value = candidate
                break
    return (value or "").strip()


def resolve_client_address(
    headers: Mapping[str, str], peer_address: Optional[str] = None
) -> str:
    """Return the first non-empty client address found in the request.

    X-Forwarded-For (first element) wins, then X-Real-IP, CF-Connecting-IP,
    Fastly-Client-IP, X-Cluster-Client-IP and finally the transport peer.
    Returns ``UNKNOWN_ADDRESS`` when nothing is available.
    """
    forwarded = _header(headers, "x-forwarded-for")
    if forwarded:
        first = forwarded.split(",")[0].strip()
        if first:
            return first

    for name in SINGLE_IP_HEADERS:
        value = _header(headers, name)
        if value:
            return value

    if peer_address and peer_address.strip():
        return peer_address.strip()

    return UNKNOWN_ADDRESS


def resolve_request_address(request: Request) -> str:
    """Resolve the client address of a FastAPI request."""
    peer = request.client.host if request.client else None
    return resolve_client_address(request.headers, peer)
