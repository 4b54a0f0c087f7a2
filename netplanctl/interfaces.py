"""Interface discovery and classification rules."""

from __future__ import annotations

import re
from typing import Callable, Iterable, Optional

from loguru import logger

from netplanctl._util import _run_cmd
from netplanctl.models import InterfaceKind, InterfaceName, LinkCategory

# Ordered rules: (category, base-name regexes). First full match wins.
DEFAULT_RULES: list[tuple[LinkCategory, list[str]]] = [
    (
        LinkCategory.VIRTUAL,
        [
            r"lo",
            r"docker.*",
            r"veth.*",
            r"cni.*",
            r"flannel.*",
            r"wg.*",
            r"tailscale.*",
            r"vmnet.*",
            r"vnet.*",
            r"virbr.*",
            r"br-[0-9a-f]{12}",
            r"tun.*",
            r"tap.*",
            r"zt[a-z0-9]+.*",
        ],
    ),
    (
        LinkCategory.BOND,
        [
            r"bond[0-9]+",
        ],
    ),
    (
        LinkCategory.WIRELESS,
        [
            r"wlan[0-9]+",
            r"wl[a-z0-9]+",
        ],
    ),
    (
        LinkCategory.PHYSICAL,
        [
            r"eth[0-9]+",
            r"ens[0-9]+",
            r"eno[0-9]+",
            r"enp[0-9s]+f?[0-9]*",
            r"enx[0-9a-f]+",
            r"en[a-z0-9-]*",
        ],
    ),
]

# Kept by default; everything else needs --all-ifaces
ALLOWED_CATEGORIES = frozenset({LinkCategory.PHYSICAL, LinkCategory.BOND, LinkCategory.WIRELESS})

# "2: ens3: <BROADCAST,...>" / "7: veth12ab@if6: <...>"
_LINK_LINE_RE = re.compile(r"^\s*\d+:\s+([^:\s]+):")


def parse_link_output(output: str) -> list[str]:
    """Parse ``ip -o link show`` output into sorted, unique interface names."""
    names: set[str] = set()
    for line in output.splitlines():
        m = _LINK_LINE_RE.match(line)
        if not m:
            continue
        name = m.group(1).split("@", 1)[0]
        if name:
            names.add(name)
    return sorted(names)


def split_vlan(name: str) -> Optional[tuple[str, str]]:
    """Return (base, tag) for ``base.digits`` names, else None.

    Names with more than one dot, or a non-numeric suffix, are not VLANs.
    """
    if name.count(".") != 1:
        return None
    base, tag = name.split(".", 1)
    if base and tag and tag.isascii() and tag.isdigit():
        return base, tag
    return None


class InterfaceClassifier:
    """Classify interface names and pick configuration candidates.

    Classification only looks at the name string; listing candidates asks
    ``lister`` (default: ``ip -o link show``) for the live names.
    """

    def __init__(
        self,
        rules: list[tuple[LinkCategory, list[str]]] | None = None,
        lister: Callable[[], str] | None = None,
        ip_bin: str = "ip",
    ):
        self.rules = [
            (category, [re.compile(p) for p in patterns]) for category, patterns in (rules or DEFAULT_RULES)
        ]
        self.ip_bin = ip_bin
        self._lister = lister or self._list_links

    def _list_links(self) -> str:
        return _run_cmd([self.ip_bin, "-o", "link", "show"])

    def category_of(self, name: str) -> LinkCategory:
        """Link category of the base name (the part before the first dot)."""
        base = name.split(".", 1)[0]
        for category, patterns in self.rules:
            for pattern in patterns:
                if pattern.fullmatch(base):
                    return category
        return LinkCategory.UNKNOWN

    def classify(self, name: str) -> InterfaceName:
        category = self.category_of(name)
        vlan = split_vlan(name)
        if vlan is None:
            return InterfaceName(name=name, kind=InterfaceKind.PLAIN, category=category)
        base, tag = vlan
        return InterfaceName(name=name, kind=InterfaceKind.VLAN, base=base, tag=tag, category=category)

    def filter_candidates(self, names: Iterable[str], include_all: bool = False) -> list[str]:
        """Apply the allow-list, falling back to dropping only virtual links."""
        names = list(names)
        if include_all:
            return names

        allowed = [n for n in names if self.category_of(n) in ALLOWED_CATEGORIES]
        if allowed:
            return allowed

        logger.debug("No interface matched the allow-list, falling back to the deny-list")
        return [n for n in names if self.category_of(n) != LinkCategory.VIRTUAL]

    def list_candidate_interfaces(self, include_all: bool = False) -> list[str]:
        names = parse_link_output(self._lister())
        candidates = self.filter_candidates(names, include_all=include_all)
        logger.debug(f"Interfaces: {len(names)} listed, {len(candidates)} candidates ({', '.join(candidates)})")
        return candidates


_default_classifier = InterfaceClassifier()


def classify(name: str) -> InterfaceName:
    """Classify ``name`` with :data:`DEFAULT_RULES`."""
    return _default_classifier.classify(name)
