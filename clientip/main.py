# Client IP - Main Application Entry Point
"""
FastAPI application with client IP resolution middleware.

This is a demonstration API that shows what address the service resolves
for the caller, and what header priority it applies.
"""

import logging
from fastapi import Depends, FastAPI, Request
from fastapi.responses import JSONResponse
from contextlib import asynccontextmanager

from clientip.config import config
from clientip.context import get_ip_address
from clientip.dependencies import get_client_ip
from clientip.middleware.client_ip import ClientIPMiddleware, ContextPropagationMiddleware
from clientip.utils.identifiers import FORWARDED_FOR_HEADER, IP_HEADERS


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan manager.
    Handles startup and shutdown events.
    """
    # Startup
    logging.basicConfig(level=config.LOG_LEVEL)
    print("🚀 Starting Client IP service...")
    if config.CLIENT_IP_HEADERS:
        print(f"🔎 Override headers: {', '.join(config.CLIENT_IP_HEADERS)}")
    else:
        print("🔎 No override headers, using built-in header priority")

    yield

    # Shutdown
    print("🛑 Shutting down Client IP service...")


# Create FastAPI app
app = FastAPI(
    title="Client IP",
    description="Resolves the real client IP address behind proxies and CDNs",
    version="1.0.0",
    lifespan=lifespan
)

# Middleware runs in reverse order of registration:
# ClientIPMiddleware resolves the address, then the context picks it up
app.add_middleware(ContextPropagationMiddleware)
app.add_middleware(ClientIPMiddleware, headers=config.CLIENT_IP_HEADERS)


# ============================================================================
# API Endpoints
# ============================================================================

@app.get("/")
async def root():
    """
    Root endpoint.
    """
    return {
        "message": "Welcome to Client IP",
        "description": "Resolves the real client IP address behind proxies and CDNs",
        "endpoints": {
            "/": "This endpoint",
            "/health": "Health check",
            "/ip": "The address resolved for your request",
            "/ip/headers": "Header priority used for resolution"
        }
    }


@app.get("/health")
async def health_check():
    """
    Health check endpoint.
    """
    return {"status": "healthy", "service": "client-ip"}


@app.get("/ip")
async def get_ip(request: Request, identifier: str = Depends(get_client_ip)):
    """
    Show the resolved client address as seen by each carrier.
    """
    return {
        "ip": request.client.host if request.client else "",
        "context_ip": get_ip_address(),
        "identifier": identifier
    }


@app.get("/ip/headers")
async def get_ip_headers():
    """
    Show the header priority used to resolve client addresses.
    """
    return {
        "override_headers": list(config.CLIENT_IP_HEADERS),
        "default_headers": list(IP_HEADERS),
        "forwarded_header": FORWARDED_FOR_HEADER
    }


# ============================================================================
# Error Handlers
# ============================================================================

@app.exception_handler(500)
async def internal_error_handler(request: Request, exc: Exception):
    """
    Handle internal server errors.
    """
    return JSONResponse(
        status_code=500,
        content={
            "error": "Internal Server Error",
            "message": "An unexpected error occurred"
        }
    )


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "clientip.main:app",
        host=config.APP_HOST,
        port=config.APP_PORT,
        reload=True,  # Enable auto-reload for development
        log_level=config.LOG_LEVEL.lower()
    )
