"""Netplan document construction and YAML rendering."""

from __future__ import annotations

from typing import Any

import yaml
from pydantic import BaseModel, Field

from netplanctl.models import ConfigIntent, DhcpMode, StaticMode

NETPLAN_VERSION = 2


class ConfigDocument(BaseModel):
    """Structured netplan document: ``network: {version, ethernets, vlans}``."""

    version: int = NETPLAN_VERSION
    ethernets: dict[str, dict[str, Any]] = Field(default_factory=dict)
    vlans: dict[str, dict[str, Any]] = Field(default_factory=dict)

    def as_tree(self) -> dict[str, Any]:
        network: dict[str, Any] = {"version": self.version, "ethernets": self.ethernets}
        if self.vlans:
            network["vlans"] = self.vlans
        return {"network": network}


def _nameservers(dns: tuple) -> dict[str, Any]:
    # An empty "nameservers: {addresses: []}" fails validation on some netplan releases
    if not dns:
        return {}
    return {"nameservers": {"addresses": [str(d) for d in dns]}}


def _static_entry(mode: StaticMode) -> dict[str, Any]:
    entry: dict[str, Any] = {
        "dhcp4": False,
        "addresses": [str(mode.address)],
        # gateway4 is deprecated; VLANs need the routes form on some versions
        "routes": [{"to": "default", "via": str(mode.gateway)}],
    }
    entry.update(_nameservers(mode.dns))
    return entry


def _dhcp_entry(mode: DhcpMode) -> dict[str, Any]:
    entry: dict[str, Any] = {"dhcp4": True}
    entry.update(_nameservers(mode.dns_override))
    return entry


def build_document(intent: ConfigIntent) -> ConfigDocument:
    """Build the netplan document for ``intent``.

    Plain interfaces get a single ``ethernets`` entry. VLAN interfaces get an
    empty ``ethernets`` entry for the base link (so it is brought up) and a
    ``vlans`` entry carrying ``id``/``link`` plus the addressing.
    """
    mode = intent.mode
    addressing = _static_entry(mode) if isinstance(mode, StaticMode) else _dhcp_entry(mode)
    iface = intent.interface

    if not iface.is_vlan:
        return ConfigDocument(ethernets={iface.name: addressing})

    vlan: dict[str, Any] = {"id": iface.vlan_id, "link": iface.link}
    vlan.update(addressing)
    return ConfigDocument(ethernets={iface.link: {}}, vlans={iface.name: vlan})


class _NetplanDumper(yaml.SafeDumper):
    """SafeDumper that indents block sequences under their key."""

    def increase_indent(self, flow: bool = False, indentless: bool = False) -> None:
        super().increase_indent(flow, False)


def _represent_bool(dumper: yaml.SafeDumper, value: bool) -> yaml.ScalarNode:
    return dumper.represent_scalar("tag:yaml.org,2002:bool", "yes" if value else "no")


_NetplanDumper.add_representer(bool, _represent_bool)


def render_yaml(document: ConfigDocument) -> str:
    """Serialize ``document`` to netplan YAML text (ends with a newline)."""
    return yaml.dump(
        document.as_tree(),
        Dumper=_NetplanDumper,
        default_flow_style=False,
        sort_keys=False,
        indent=2,
        width=4096,
    )
