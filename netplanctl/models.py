"""Pydantic models and enums for netplan configuration."""

from __future__ import annotations

from enum import Enum
from ipaddress import IPv4Address
from pathlib import Path
from typing import Annotated, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field


class InterfaceKind(str, Enum):
    """Plain ethernet name or ``base.tag`` VLAN sub-interface."""

    PLAIN = "plain"
    VLAN = "vlan"


class LinkCategory(str, Enum):
    """Link category derived from the interface name."""

    PHYSICAL = "physical"
    BOND = "bond"
    WIRELESS = "wireless"
    VIRTUAL = "virtual"
    UNKNOWN = "unknown"


class ConfigModeKind(str, Enum):
    """IPv4 addressing mode."""

    STATIC = "static"
    DHCP = "dhcp"


class CidrAddress(BaseModel):
    """A host address inside a subnet, e.g. ``192.168.100.10/24``.

    Built through :func:`netplanctl.addressing.parse_cidr`, which rejects
    network and broadcast addresses.
    """

    model_config = ConfigDict(frozen=True)

    address: IPv4Address
    prefix: int = Field(ge=1, le=32)

    def __str__(self) -> str:
        return f"{self.address}/{self.prefix}"


class InterfaceName(BaseModel):
    """A classified interface name.

    ``base`` and ``tag`` are only set for VLAN names (``ens3.120``).
    """

    model_config = ConfigDict(frozen=True)

    name: str
    kind: InterfaceKind = InterfaceKind.PLAIN
    base: Optional[str] = None
    tag: Optional[str] = None
    category: LinkCategory = LinkCategory.UNKNOWN

    @property
    def is_vlan(self) -> bool:
        return self.kind == InterfaceKind.VLAN

    @property
    def vlan_id(self) -> Optional[int]:
        return int(self.tag) if self.tag is not None else None

    @property
    def link(self) -> str:
        """Name of the ethernet link the configuration hangs off."""
        return self.base if self.is_vlan and self.base else self.name


class StaticMode(BaseModel):
    model_config = ConfigDict(frozen=True)

    kind: Literal[ConfigModeKind.STATIC] = ConfigModeKind.STATIC
    address: CidrAddress
    gateway: IPv4Address
    dns: tuple[IPv4Address, ...] = Field(min_length=1)


class DhcpMode(BaseModel):
    model_config = ConfigDict(frozen=True)

    kind: Literal[ConfigModeKind.DHCP] = ConfigModeKind.DHCP
    dns_override: tuple[IPv4Address, ...] = ()


ConfigMode = Annotated[Union[StaticMode, DhcpMode], Field(discriminator="kind")]


class ConfigIntent(BaseModel):
    """Validated description of what should be written for one interface."""

    model_config = ConfigDict(frozen=True)

    interface: InterfaceName
    mode: ConfigMode
    target_file: Path

    @property
    def is_static(self) -> bool:
        return isinstance(self.mode, StaticMode)

    @property
    def dns(self) -> tuple[IPv4Address, ...]:
        if isinstance(self.mode, StaticMode):
            return self.mode.dns
        return self.mode.dns_override


class IntentRequest(BaseModel):
    """Raw, unvalidated user input (CLI flags or interactive answers)."""

    static: bool = False
    dhcp: bool = False
    interface: Optional[str] = None
    cidr: Optional[str] = None
    gateway: Optional[str] = None
    dns: Optional[str] = None
    target_file: Optional[str] = None
    include_all: bool = False


class WriteResult(BaseModel):
    target: Path
    backup: Optional[Path] = None
    created: bool = False
    bytes_written: int = 0
