"""IPv4 and CIDR arithmetic: parsing, masks, network/broadcast, gateway checks.

Everything here is pure. Failures raise the :mod:`netplanctl.exceptions`
address errors so that interactive and non-interactive callers see the same
classification.
"""

from __future__ import annotations

import re
from ipaddress import IPv4Address
from typing import Iterable

from netplanctl.exceptions import DegenerateAddressError, FormatError, RangeError, SubnetMismatchError
from netplanctl.models import CidrAddress

FULL_MASK = 0xFFFFFFFF

_DOTTED_QUAD_RE = re.compile(r"([0-9]{1,3})\.([0-9]{1,3})\.([0-9]{1,3})\.([0-9]{1,3})")
_PREFIX_RE = re.compile(r"[0-9]{1,2}")


def parse_address(text: str) -> IPv4Address:
    """Parse strict dotted-decimal text (``a.b.c.d``, each octet 0-255).

    Leading zeros are rejected (``010`` reads as octal in some tools), so an
    accepted string is always its own canonical form.
    """
    m = _DOTTED_QUAD_RE.fullmatch(text)
    if not m:
        raise FormatError(f"Invalid IPv4 address: {text!r}")

    value = 0
    for octet in m.groups():
        if len(octet) > 1 and octet.startswith("0"):
            raise FormatError(f"Invalid IPv4 address (leading zero in {octet!r}): {text!r}")
        n = int(octet)
        if n > 255:
            raise FormatError(f"Invalid IPv4 address (octet {n} > 255): {text!r}")
        value = (value << 8) | n
    return IPv4Address(value)


def parse_prefix(text: str) -> int:
    """Parse a prefix length in [1, 32]."""
    if not _PREFIX_RE.fullmatch(text):
        raise FormatError(f"Invalid prefix: {text!r} (expected 1..32)")
    prefix = int(text)
    if not 1 <= prefix <= 32:
        raise FormatError(f"Invalid prefix: {prefix} (expected 1..32)")
    return prefix


def mask_of(prefix: int) -> int:
    """Return the 32-bit netmask for ``prefix`` as an integer."""
    if not 0 <= prefix <= 32:
        raise RangeError(f"Prefix out of range: {prefix}")
    if prefix == 32:
        return FULL_MASK
    return (FULL_MASK << (32 - prefix)) & FULL_MASK


def network_of(address: IPv4Address, prefix: int) -> IPv4Address:
    """Network address of ``address`` under ``prefix``."""
    return IPv4Address(int(address) & mask_of(prefix))


def broadcast_of(address: IPv4Address, prefix: int) -> IPv4Address:
    """Broadcast address of ``address`` under ``prefix``."""
    mask = mask_of(prefix)
    return IPv4Address(((int(address) & mask) | (~mask & FULL_MASK)) & FULL_MASK)


def netmask_of(prefix: int) -> IPv4Address:
    """Dotted form of the netmask, e.g. ``255.255.255.224`` for /27."""
    return IPv4Address(mask_of(prefix))


def parse_cidr(text: str) -> CidrAddress:
    """Parse ``address/prefix`` into a host :class:`CidrAddress`.

    Raises:
        FormatError: missing ``/``, malformed address or prefix outside 1..32.
        RangeError: the address is the subnet's network or broadcast address.
            With this rule no /31 or /32 address is accepted.
    """
    if text.count("/") != 1:
        raise FormatError(f"Invalid CIDR: {text!r}. Use IP/prefix, e.g. 192.168.100.10/24")
    addr_text, prefix_text = text.split("/", 1)
    address = parse_address(addr_text)
    prefix = parse_prefix(prefix_text)

    if address in (network_of(address, prefix), broadcast_of(address, prefix)):
        raise RangeError(f"Host IPv4 {address} cannot be the network or broadcast address for /{prefix}")
    return CidrAddress(address=address, prefix=prefix)


def validate_gateway_same_subnet(host: CidrAddress, gateway: IPv4Address) -> None:
    """Check that ``gateway`` is a usable, different address in ``host``'s subnet."""
    network = network_of(host.address, host.prefix)
    if network_of(gateway, host.prefix) != network:
        raise SubnetMismatchError(f"Gateway {gateway} is not in the same subnet as {host}")

    if gateway in (network, broadcast_of(host.address, host.prefix), host.address):
        raise DegenerateAddressError(f"Gateway {gateway} cannot be the network, broadcast or host address of {host}")


def parse_gateway(host: CidrAddress, text: str) -> IPv4Address:
    """Parse ``text`` and check it is a usable gateway for ``host``."""
    try:
        gateway = parse_address(text)
    except FormatError:
        raise FormatError(f"Invalid IPv4 gateway: {text!r}") from None
    validate_gateway_same_subnet(host, gateway)
    return gateway


def parse_dns_list(value: str | Iterable[str]) -> tuple[IPv4Address, ...]:
    """Parse a comma-separated (or pre-split) DNS server list, keeping order."""
    items = value.split(",") if isinstance(value, str) else list(value)
    servers: list[IPv4Address] = []
    for item in items:
        item = item.strip()
        if not item:
            continue
        try:
            servers.append(parse_address(item))
        except FormatError:
            raise FormatError(f"Invalid DNS entry: {item!r}") from None
    return tuple(servers)
