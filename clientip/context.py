# Request Context
"""
Request-scoped storage for the client IP address.

The address lives in a module-private ContextVar. asyncio gives every task
its own copy of the context, so a value set while handling one request is
never seen by another.
"""

from contextvars import Context, ContextVar, Token
from typing import Optional

# Only this module holds the variable, so nothing else can clobber it
_request_ip: ContextVar[str] = ContextVar("request_ip", default="")


def with_ip_address(ctx: Context, ip: str) -> Context:
    """
    Return a copy of ctx carrying ip. ctx itself is left unchanged.

    Use ctx.run(...) on the result to execute code that sees the address.
    """
    derived = ctx.copy()
    derived.run(_request_ip.set, ip)
    return derived


def set_ip_address(ip: str) -> Token:
    """Set the client's IP address in the current context."""
    return _request_ip.set(ip)


def reset_ip_address(token: Token) -> None:
    """Restore the value that was current before set_ip_address."""
    _request_ip.reset(token)


def get_ip_address(ctx: Optional[Context] = None) -> str:
    """
    Get the client's IP address from the request context.

    Args:
        ctx: Context to read from; the current context when None

    Returns:
        The stored address, or "" if none was set
    """
    if ctx is None:
        return _request_ip.get()
    return ctx.get(_request_ip, "")
