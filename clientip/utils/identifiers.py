# Client Identifier Utilities
"""
Utilities for extracting client identifiers from requests.
Supports IP extraction with proxy/load balancer/CDN awareness.
"""

from typing import Sequence
from fastapi import Request

from clientip.context import get_ip_address
from clientip.utils.canonical import canonicalize_ip


# Headers carrying a single client address, highest priority first
IP_HEADERS = (
    "DO_Connecting-IP",  # DigitalOcean
    "DO-Connecting-IP",
    "True-Client-IP",  # Akamai, Cloudflare Enterprise
    "X-Real-IP",  # nginx
    "CF-Connecting-IP",  # Cloudflare
    "Fastly-Client-IP",  # Fastly
    "X-Cluster-Client-IP",  # Rackspace, Riverbed
    "X-Client-IP",
)

# Multi-hop proxy chain header
# Format: "client, proxy1, proxy2"
FORWARDED_FOR_HEADER = "X-Forwarded-For"
FORWARDED_FOR_DELIMITER = ", "


def get_peer_host(request: Request) -> str:
    """
    Get the host part of the transport-level peer address.

    Args:
        request: FastAPI Request object

    Returns:
        Peer host, or "" when the server did not report a peer
    """
    # request.client is None when the ASGI scope has no "client" entry
    # (unix sockets, some test harnesses)
    client = request.client
    if client is None or not client.host:
        return ""
    return client.host


def get_raw_client_ip(request: Request, headers: Sequence[str] = ()) -> str:
    """
    Extract the client's IP address from the request, without normalizing it.

    Lookup order, first non-empty value wins:
    1. the caller's override headers, in order
    2. the built-in IP_HEADERS, in order
    3. the leftmost entry of X-Forwarded-For
    4. the transport peer host

    Args:
        request: FastAPI Request object
        headers: Override header names, checked before IP_HEADERS

    Returns:
        Raw client address, or "" if nothing was found
    """
    # Check the provided headers first
    for header in headers:
        ip = request.headers.get(header)
        if ip:
            return ip

    # Check the default headers
    for header in IP_HEADERS:
        ip = request.headers.get(header)
        if ip:
            return ip

    forwarded_for = request.headers.get(FORWARDED_FOR_HEADER)
    if forwarded_for:
        # Take the first IP (original client)
        return forwarded_for.split(FORWARDED_FOR_DELIMITER, 1)[0]

    # Fall back to direct client IP
    return get_peer_host(request)


def lookup_from_request(request: Request, headers: Sequence[str] = ()) -> str:
    """
    Look up the canonical client IP address of a request.

    Header values are trusted as-is. Pass the headers your own reverse
    proxy sets as `headers` so they take precedence over anything a
    client could send.

    Args:
        request: FastAPI Request object
        headers: Override header names, checked before the defaults

    Returns:
        IPv4 address, IPv6 /64 prefix, or "" if no address was found
    """
    return canonicalize_ip(get_raw_client_ip(request, headers))


def get_client_identifier(request: Request) -> str:
    """
    Get a unique identifier for the client.

    Uses the address stored in the request context by
    ContextPropagationMiddleware, and resolves it from the request
    when no middleware ran.

    Args:
        request: FastAPI Request object

    Returns:
        Client identifier string, "" if unknown
    """
    ip = get_ip_address()
    if ip:
        return ip
    return lookup_from_request(request)
