"""Turn an :class:`IntentRequest` into a validated, immutable :class:`ConfigIntent`.

The phases run in order and stop at the first error:

1. mode resolution (static xor DHCP, no static fields under DHCP)
2. interface resolution (explicit name or classifier candidates)
3. static field validation (CIDR, gateway, DNS)
4. DHCP DNS override validation

Nothing here prompts or prints; interactive callers pass ``chooser`` and
re-run after fixing the request.
"""

from __future__ import annotations

from pathlib import Path
from typing import Callable, Optional, Union

from loguru import logger

from netplanctl._util import _validate_interface_name
from netplanctl.addressing import parse_cidr, parse_dns_list, parse_gateway
from netplanctl.exceptions import (
    AmbiguousInterfaceError,
    FormatError,
    MissingFieldError,
    ModeConflictError,
    NoInterfaceError,
    RangeError,
)
from netplanctl.interfaces import InterfaceClassifier, split_vlan
from netplanctl.models import ConfigIntent, ConfigModeKind, DhcpMode, IntentRequest, InterfaceName, StaticMode
from netplanctl.settings import Settings

MAX_VLAN_ID = 4094

InterfaceChooser = Callable[[list[str]], str]


def resolve_mode(request: IntentRequest) -> ConfigModeKind:
    if request.static and request.dhcp:
        raise ModeConflictError("Choose exactly one mode: --dhcp4 OR --static4.")
    if not request.static and not request.dhcp:
        raise ModeConflictError("Missing mode. Use --dhcp4 or --static4.")
    if request.dhcp and (request.cidr or request.gateway):
        raise ModeConflictError("Options conflict: --dhcp4 cannot be used with --ip/--gw.")
    return ConfigModeKind.STATIC if request.static else ConfigModeKind.DHCP


def check_interface_name(name: str) -> None:
    """Raise FormatError for an unusable name, RangeError for a VLAN id above 4094."""
    if not _validate_interface_name(name):
        raise FormatError(f"Invalid interface name: {name!r}")

    vlan = split_vlan(name)
    if vlan is not None and int(vlan[1]) > MAX_VLAN_ID:
        raise RangeError(f"VLAN id {int(vlan[1])} of {name} is out of range (0..{MAX_VLAN_ID})")


def resolve_interface(
    request: IntentRequest,
    classifier: InterfaceClassifier,
    chooser: Optional[InterfaceChooser] = None,
) -> InterfaceName:
    name = request.interface
    if not name:
        candidates = classifier.list_candidate_interfaces(include_all=request.include_all)
        if not candidates:
            raise NoInterfaceError("No candidate interface found. Specify one with --iface.")
        if len(candidates) == 1:
            name = candidates[0]
            logger.info(f"Using the only candidate interface: {name}")
        elif chooser is not None:
            name = chooser(candidates)
        else:
            raise AmbiguousInterfaceError(
                f"Several candidate interfaces ({', '.join(candidates)}). Specify one with --iface.",
                candidates=candidates,
            )

    check_interface_name(name)
    return classifier.classify(name)


def resolve_static_mode(request: IntentRequest) -> StaticMode:
    missing = [
        flag
        for flag, value in (("--ip", request.cidr), ("--gw", request.gateway), ("--dns", request.dns))
        if not value
    ]
    if missing:
        raise MissingFieldError(f"Static mode requires --ip, --gw, and --dns (missing: {', '.join(missing)}).", missing)

    address = parse_cidr(request.cidr)  # type: ignore[arg-type]
    gateway = parse_gateway(address, request.gateway)  # type: ignore[arg-type]
    dns = parse_dns_list(request.dns)  # type: ignore[arg-type]
    if not dns:
        raise MissingFieldError("Static mode requires at least one DNS server.", ["--dns"])
    return StaticMode(address=address, gateway=gateway, dns=dns)


def resolve_dhcp_mode(request: IntentRequest) -> DhcpMode:
    return DhcpMode(dns_override=parse_dns_list(request.dns) if request.dns else ())


def resolve_target_file(explicit: Union[str, Path, None], settings: Settings) -> Path:
    """Explicit path, else the first existing netplan document, else the default file."""
    if explicit:
        return Path(explicit)

    directory = settings.netplan_dir
    existing = sorted(directory.glob("*.yaml")) + sorted(directory.glob("*.yml"))
    if existing:
        logger.debug(f"Found {len(existing)} netplan file(s) in {directory}, using {existing[0]}")
        return existing[0]
    return settings.default_target


def build_intent(
    request: IntentRequest,
    classifier: InterfaceClassifier,
    settings: Settings,
    chooser: Optional[InterfaceChooser] = None,
) -> ConfigIntent:
    """Validate ``request`` completely and return the resulting intent."""
    kind = resolve_mode(request)
    interface = resolve_interface(request, classifier, chooser=chooser)
    mode: Union[StaticMode, DhcpMode]
    if kind == ConfigModeKind.STATIC:
        mode = resolve_static_mode(request)
    else:
        mode = resolve_dhcp_mode(request)
    target = resolve_target_file(request.target_file, settings)

    intent = ConfigIntent(interface=interface, mode=mode, target_file=target)
    logger.debug(f"Intent: {interface.name} ({interface.kind.value}) {kind.value} -> {target}")
    return intent
