"""Terminal formatters for configuration previews and interface listings."""

from __future__ import annotations

from tabulate import tabulate

from netplanctl.addressing import netmask_of, network_of
from netplanctl.interfaces import InterfaceClassifier
from netplanctl.models import ConfigIntent, StaticMode


class PreviewFormatter:
    """Format a ConfigIntent as the pre-write configuration preview."""

    TITLE = "CONFIGURATION PREVIEW"

    def __init__(self, intent: ConfigIntent) -> None:
        self.intent = intent

    def rows(self) -> list[list[str]]:
        intent = self.intent
        iface = intent.interface
        rows = [
            ["Netplan file", str(intent.target_file)],
            ["Interface", iface.name],
        ]
        if iface.is_vlan:
            rows.append(["VLAN", f"id {iface.vlan_id} on {iface.link}"])

        mode = intent.mode
        if isinstance(mode, StaticMode):
            network = network_of(mode.address.address, mode.address.prefix)
            rows.append(["Mode", "static IPv4"])
            rows.append(["IPv4", str(mode.address)])
            rows.append(["Subnet", f"{network}/{mode.address.prefix} ({netmask_of(mode.address.prefix)})"])
            rows.append(["GW IPv4", str(mode.gateway)])
            rows.append(["DNS", ", ".join(str(d) for d in mode.dns)])
        else:
            rows.append(["Mode", "DHCPv4"])
            if mode.dns_override:
                rows.append(["DNS (override)", ", ".join(str(d) for d in mode.dns_override)])
            else:
                rows.append(["DNS", "from DHCP lease"])
        return rows

    def format(self) -> str:
        table = tabulate(self.rows(), tablefmt="simple_grid")
        width = len(table.split("\n")[0])
        return "\n".join([self.TITLE.center(width, "="), table])


class InterfaceListFormatter:
    """Format candidate interfaces, one per line or as a classification table."""

    def __init__(self, names: list[str], classifier: InterfaceClassifier) -> None:
        self.names = names
        self.classifier = classifier

    def format(self, detailed: bool = False) -> str:
        if not detailed:
            return "\n".join(self.names)

        rows = []
        for name in self.names:
            iface = self.classifier.classify(name)
            vlan = f"{iface.vlan_id} on {iface.link}" if iface.is_vlan else "-"
            rows.append([iface.name, iface.category.value, iface.kind.value, vlan])
        return tabulate(rows, headers=["Interface", "Category", "Kind", "VLAN"], tablefmt="simple")
