"""
Server address parsing and normalization.

Stamp addresses are ``host`` or ``host:port`` strings where ``host`` is an IP
literal or a name; IPv6 literals are bracketed whenever a port follows. A
protocol may imply a default port (53 for plain DNS, 853 for DoT and DoQ):

* [normalize_address()][stampkit.models.address.normalize_address] produces the
  canonical form held by a stamp, appending the default port when none is given.
* [compact_address()][stampkit.models.address.compact_address] produces the
  wire form, dropping a port equal to the default.

The two are inverse on canonical addresses, which is what makes
``encode(decode(text)) == text`` hold for every stamp.

Examples:
    ```python
    normalize_address("8.8.8.8", 53)              # '8.8.8.8:53'
    normalize_address("1.1.1.1:8853", 853)        # '1.1.1.1:8853'
    normalize_address("2001:db8::1", 853)         # '[2001:db8::1]:853'
    normalize_address("127.0.0.1", None)          # '127.0.0.1'
    compact_address("[2001:db8::1]:853", 853)     # '[2001:db8::1]'
    ```
"""

from __future__ import annotations

from ipaddress import IPv6Address, ip_address

from stampkit.core.exceptions import InvalidField


_PORT_MAX = 65535


def _parse_port(raw: str, address: str) -> int:
    if not raw.isascii() or not raw.isdigit():
        raise InvalidField(f"Invalid port in address '{address}'")
    port = int(raw)
    if port > _PORT_MAX:
        raise InvalidField(f"Port out of range in address '{address}': {port}")
    return port


def _validate_ipv6(host: str, address: str) -> None:
    try:
        ip = ip_address(host)
    except ValueError:
        raise InvalidField(f"Invalid IPv6 literal in address '{address}'") from None
    if not isinstance(ip, IPv6Address):
        raise InvalidField(f"Bracketed host is not an IPv6 literal in address '{address}'")


def split_host_port(address: str) -> tuple[str, int | None]:
    """Split an address into its host and optional port.

    Args:
        address: ``host``, ``host:port``, ``[ipv6]``, ``[ipv6]:port``, or a bare
            IPv6 literal.

    Returns:
        Tuple of the host (IPv6 without brackets) and the port, or ``None``
        when the address has no port.

    Raises:
        InvalidField: If the address is empty, has an unbalanced bracket, a
            non-numeric or out-of-range port, or an invalid bracketed literal.
    """
    if not address:
        raise InvalidField("Server address must not be empty")

    if address.startswith("["):
        end = address.find("]")
        if end < 0:
            raise InvalidField(f"Unterminated IPv6 bracket in address '{address}'")
        host, rest = address[1:end], address[end + 1 :]
        _validate_ipv6(host, address)
        if not rest:
            return host, None
        if not rest.startswith(":"):
            raise InvalidField(f"Unexpected characters after IPv6 literal in '{address}'")
        return host, _parse_port(rest[1:], address)

    if "]" in address:
        raise InvalidField(f"Unbalanced bracket in address '{address}'")

    colons = address.count(":")
    if colons > 1:
        # An unbracketed IPv6 literal cannot carry a port
        _validate_ipv6(address, address)
        return address, None
    if colons == 1:
        host, _, raw_port = address.partition(":")
        if not host:
            raise InvalidField(f"Missing host in address '{address}'")
        return host, _parse_port(raw_port, address)
    return address, None


def join_host_port(host: str, port: int | None) -> str:
    """Format a host and optional port, bracketing IPv6 literals."""
    formatted = f"[{host}]" if ":" in host else host
    return formatted if port is None else f"{formatted}:{port}"


def normalize_address(address: str, default_port: int | None) -> str:
    """Return the canonical ``host[:port]`` form of *address*.

    Bare IPv6 literals are bracketed. When the address has no port and
    *default_port* is given, the default is appended. Addresses with an
    explicit port are returned exactly as written. An empty address stays
    empty.
    """
    if not address:
        return address
    host, port = split_host_port(address)
    if port is not None:
        return address
    return join_host_port(host, default_port)


def compact_address(address: str, default_port: int | None) -> str:
    """Return the wire form of a canonical address.

    Drops a ``:<default_port>`` suffix; any other address is returned
    unchanged.
    """
    if not address or default_port is None:
        return address
    host, port = split_host_port(address)
    if port == default_port and address.endswith(f":{default_port}"):
        return join_host_port(host, None)
    return address
