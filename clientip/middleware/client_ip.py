# Client IP Middleware
"""
FastAPI middleware for resolving the real client IP address.

Two middlewares are provided:
- ClientIPMiddleware rewrites the request's peer address (request.client)
  with the address found in proxy/CDN headers.
- ContextPropagationMiddleware copies the peer address into the request
  context, where get_ip_address() can read it from anywhere.

Starlette runs the last added middleware first, so add
ContextPropagationMiddleware before ClientIPMiddleware:

    app.add_middleware(ContextPropagationMiddleware)
    app.add_middleware(ClientIPMiddleware, headers=["CF-Connecting-IP"])
"""

import logging
from typing import Callable, Optional, Sequence
from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.types import ASGIApp

from clientip.context import reset_ip_address, set_ip_address
from clientip.utils.identifiers import get_peer_host, lookup_from_request

logger = logging.getLogger(__name__)


class ClientIPMiddleware(BaseHTTPMiddleware):
    """
    Middleware that replaces the peer address with the resolved client IP.
    """

    def __init__(self, app: ASGIApp, headers: Optional[Sequence[str]] = None):
        """
        Initialize client IP middleware.

        Args:
            app: ASGI application
            headers: Override header names, checked before the defaults
        """
        super().__init__(app)
        self.headers = tuple(headers or ())

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        """
        Resolve the client IP and pass the request on.

        The request is never rejected; when no address can be resolved
        the original peer address is kept.

        Args:
            request: Incoming HTTP request
            call_next: Next middleware/handler in chain

        Returns:
            Response from downstream handler
        """
        ip = lookup_from_request(request, self.headers)

        if ip:
            # Keep the original port, ASGI expects a (host, port) pair
            port = request.client.port if request.client else 0
            request.scope["client"] = (ip, port)
            logger.debug("Resolved client IP %s for %s", ip, request.url.path)
        else:
            logger.debug("No client IP resolved for %s", request.url.path)

        return await call_next(request)


class ContextPropagationMiddleware(BaseHTTPMiddleware):
    """
    Middleware that stores the peer address in the request context.
    """

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        """
        Store request.client.host for get_ip_address() and pass the request on.

        Args:
            request: Incoming HTTP request
            call_next: Next middleware/handler in chain

        Returns:
            Response from downstream handler
        """
        token = set_ip_address(get_peer_host(request))
        try:
            return await call_next(request)
        finally:
            reset_ip_address(token)
