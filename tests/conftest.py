"""Shared fixtures for the netplanctl test suite."""

from __future__ import annotations

from pathlib import Path
from unittest.mock import MagicMock

import pytest

from netplanctl.interfaces import InterfaceClassifier
from netplanctl.models import IntentRequest
from netplanctl.settings import Settings

# ── link lister output ────────────────────────────────────────────────

IP_LINK_OUTPUT = """\
1: lo: <LOOPBACK,UP,LOWER_UP> mtu 65536 qdisc noqueue state UNKNOWN mode DEFAULT group default qlen 1000\\    link/loopback 00:00:00:00:00:00 brd 00:00:00:00:00:00
2: ens3: <BROADCAST,MULTICAST,UP,LOWER_UP> mtu 1500 qdisc fq_codel state UP mode DEFAULT group default qlen 1000\\    link/ether 52:54:00:12:34:56 brd ff:ff:ff:ff:ff:ff
3: docker0: <NO-CARRIER,BROADCAST,MULTICAST,UP> mtu 1500 qdisc noqueue state DOWN mode DEFAULT group default\\    link/ether 02:42:ac:11:00:01 brd ff:ff:ff:ff:ff:ff
4: veth1a2b3c@if5: <BROADCAST,MULTICAST,UP,LOWER_UP> mtu 1500 qdisc noqueue master docker0 state UP mode DEFAULT group default\\    link/ether 6a:1b:2c:3d:4e:5f brd ff:ff:ff:ff:ff:ff link-netnsid 0
5: ens3.120@ens3: <BROADCAST,MULTICAST,UP,LOWER_UP> mtu 1500 qdisc noqueue state UP mode DEFAULT group default qlen 1000\\    link/ether 52:54:00:12:34:56 brd ff:ff:ff:ff:ff:ff
"""


@pytest.fixture()
def ip_link_output() -> str:
    """Canned `ip -o link show` output (loopback, NIC, docker bridge, veth, VLAN)."""
    return IP_LINK_OUTPUT


@pytest.fixture()
def make_classifier():
    """Factory fixture: InterfaceClassifier fed with canned ``ip -o link`` output."""

    def _make(output: str = IP_LINK_OUTPUT) -> InterfaceClassifier:
        return InterfaceClassifier(lister=lambda: output)

    return _make


@pytest.fixture()
def settings(tmp_path: Path) -> Settings:
    """Settings pointing at an empty temporary netplan directory."""
    netplan_dir = tmp_path / "netplan"
    netplan_dir.mkdir()
    return Settings(netplan_dir=netplan_dir, require_root=False)


@pytest.fixture()
def static_request():
    """Factory fixture returning a valid static IntentRequest with overrides."""

    def _make(**kwargs) -> IntentRequest:
        defaults = dict(
            static=True,
            interface="ens3",
            cidr="192.168.100.10/24",
            gateway="192.168.100.1",
            dns="1.1.1.1,8.8.8.8",
        )
        defaults.update(kwargs)
        return IntentRequest(**defaults)

    return _make


@pytest.fixture()
def dhcp_request():
    """Factory fixture returning a valid DHCP IntentRequest with overrides."""

    def _make(**kwargs) -> IntentRequest:
        defaults = dict(dhcp=True, interface="ens3")
        defaults.update(kwargs)
        return IntentRequest(**defaults)

    return _make


@pytest.fixture()
def mock_runner():
    """MagicMock of NetplanRunner with successful validate/apply."""
    runner = MagicMock()
    runner.validate.return_value = None
    runner.apply.return_value = None
    return runner
