# Route Dependencies
"""
Dependency injection functions for FastAPI routes.
"""

from fastapi import Request

from clientip.utils.identifiers import get_client_identifier


async def get_client_ip(request: Request) -> str:
    """
    Dependency injection function for the client IP address.

    Usage:
        @app.get("/")
        async def handler(ip: str = Depends(get_client_ip)): ...

    Returns:
        Client IP address, "" if unknown
    """
    return get_client_identifier(request)
