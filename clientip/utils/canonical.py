# Address Canonicalization
"""
Normalize client addresses so they can be compared across requests.

IPv4 addresses are kept as-is. IPv6 addresses are collapsed to their /64
network prefix: clients routinely get a fresh address per connection inside
the same /64, so the prefix is what identifies them.
"""

import ipaddress

# Number of leading IPv6 bits kept by canonicalize_ip
IPV6_PREFIX_LENGTH = 64

_IPV6_MASK = ((1 << IPV6_PREFIX_LENGTH) - 1) << (128 - IPV6_PREFIX_LENGTH)


def canonicalize_ip(ip: str) -> str:
    """
    Return a form of ip suitable for comparison to other IPs.

    The address family is decided by whichever of '.' or ':' shows up
    first. A '.' means IPv4 and the value is returned unchanged, without
    validation. A ':' means IPv6: the value is parsed and masked to its
    /64 prefix.

    Args:
        ip: Raw address taken from a header or the transport peer

    Returns:
        The canonical address, or "" if ip is not an address
    """
    is_ipv6 = False
    for char in ip:
        if char == ".":
            # IPv4
            return ip
        if char == ":":
            is_ipv6 = True
            break

    if not is_ipv6:
        return ""  # Not an IP address at all

    try:
        address = ipaddress.IPv6Address(ip)
    except ValueError:
        return ""  # Invalid IP

    # Zoned addresses ("fe80::1%eth0") are not accepted
    if address.scope_id is not None:
        return ""

    return str(ipaddress.IPv6Address(int(address) & _IPV6_MASK))
