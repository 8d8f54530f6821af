#!/usr/bin/env python3
"""
Smoke check script for the Client IP service.

This script shows client IP resolution in action against a running server by:
1. Asking for the address with no proxy headers
2. Sending default proxy headers in different combinations
3. Sending an IPv6 address to see the /64 collapsing
"""

import asyncio
from typing import Dict
import sys

try:
    import httpx
except ImportError:
    print("❌ httpx not installed. Install with: pip install httpx")
    sys.exit(1)


BASE_URL = "http://localhost:8000"
COLORS = {
    "green": "\033[92m",
    "red": "\033[91m",
    "yellow": "\033[93m",
    "blue": "\033[94m",
    "reset": "\033[0m"
}

SCENARIOS = [
    ("No proxy headers", {}, None),
    (
        "X-Real-IP beats X-Forwarded-For",
        {"X-Forwarded-For": "48.135.12.111", "X-Real-IP": "48.135.12.111"},
        "48.135.12.111",
    ),
    (
        "X-Forwarded-For chain",
        {"X-Forwarded-For": "48.135.12.111, 181.95.251.176"},
        "48.135.12.111",
    ),
    (
        "IPv6 collapsed to /64",
        {"X-Forwarded-For": "42e7:9f02:2ced:9303:2691:cd2e:7f9d:8ae3"},
        "42e7:9f02:2ced:9303::",
    ),
    ("Cloudflare header", {"CF-Connecting-IP": "212.207.103.215"}, "212.207.103.215"),
]


def print_colored(message: str, color: str):
    """Print colored output."""
    print(f"{COLORS.get(color, '')}{message}{COLORS['reset']}")


async def check_scenario(client: httpx.AsyncClient, name: str, headers: Dict[str, str], expected):
    """Request /ip with the given headers and compare the result."""
    response = await client.get(f"{BASE_URL}/ip", headers=headers)
    data = response.json()
    ip = data.get("ip")

    if expected is None or ip == expected:
        print_colored(f"✓ {name}: {ip}", "green")
    else:
        print_colored(f"✗ {name}: got {ip}, expected {expected}", "red")

    if data.get("context_ip") != ip:
        print_colored(f"  ✗ context_ip mismatch: {data.get('context_ip')}", "red")


async def check_headers_endpoint():
    """Show the header priority the server applies."""
    print_colored("\n🧪 Header Priority", "blue")
    print_colored("=" * 60, "blue")

    async with httpx.AsyncClient() as client:
        response = await client.get(f"{BASE_URL}/ip/headers")
        data = response.json()
        overrides = data.get("override_headers") or ["(none)"]
        print(f"  - Override: {', '.join(overrides)}")
        print(f"  - Defaults: {', '.join(data.get('default_headers', []))}")
        print(f"  - Forwarded: {data.get('forwarded_header')}")


async def main():
    """Run all checks."""
    print_colored("\n" + "=" * 60, "blue")
    print_colored("🔎 Client IP - Smoke Check", "blue")
    print_colored("=" * 60, "blue")

    # Check if API is running
    try:
        async with httpx.AsyncClient() as client:
            await client.get(f"{BASE_URL}/health", timeout=2.0)
    except httpx.HTTPError:
        print_colored("\n❌ API is not running!", "red")
        print_colored("Start the API with: uvicorn clientip.main:app --reload\n", "yellow")
        return

    await check_headers_endpoint()

    print_colored("\n🧪 Resolution Scenarios", "blue")
    print_colored("=" * 60, "blue")
    async with httpx.AsyncClient() as client:
        for name, headers, expected in SCENARIOS:
            await check_scenario(client, name, headers, expected)

    print_colored("\n💡 Tips:", "yellow")
    print("  - Trust your proxy's header first: export CLIENT_IP_HEADERS=CF-Connecting-IP")
    print()


if __name__ == "__main__":
    asyncio.run(main())
