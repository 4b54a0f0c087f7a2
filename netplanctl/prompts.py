"""Interactive input acquisition.

Fills the gaps of an :class:`IntentRequest` by asking the operator, re-asking a
field for as long as the address validators reject it. Validation itself stays
in :mod:`netplanctl.addressing` / :mod:`netplanctl.intent`.
"""

from __future__ import annotations

from typing import Any, Callable, Optional

from prompt_toolkit import prompt

from netplanctl.addressing import parse_cidr, parse_dns_list, parse_gateway
from netplanctl.exceptions import AddressError
from netplanctl.intent import check_interface_name
from netplanctl.models import IntentRequest


class InteractivePrompter:
    """Ask for missing values on the terminal.

    Ctrl+C / Ctrl+D raise KeyboardInterrupt so the CLI can abort cleanly.
    """

    def __init__(self, ask: Callable[[str], str] = prompt, echo: Callable[[str], Any] = print) -> None:
        self._ask = ask
        self._echo = echo

    def ask(self, label: str, default: str = "") -> str:
        suffix = f" [{default}]" if default else ""
        try:
            answer = self._ask(f"{label}{suffix}: ").strip()
        except EOFError:
            raise KeyboardInterrupt from None
        return answer or default

    def ask_validated(self, label: str, check: Callable[[str], Any], default: str = "") -> str:
        """Ask until ``check`` accepts the answer; return the accepted text."""
        while True:
            answer = self.ask(label, default)
            if not answer:
                self._echo(f"  {label} is required")
                continue
            try:
                check(answer)
            except AddressError as e:
                self._echo(f"  {e}")
                continue
            return answer

    def ask_yes_no(self, question: str, default: bool = False) -> bool:
        answer = self.ask(f"{question} [{'Y/n' if default else 'y/N'}]").lower()
        if not answer:
            return default
        return answer in ("y", "yes")

    def choose_interface(self, candidates: list[str]) -> str:
        self._echo("Candidate interfaces:")
        for idx, name in enumerate(candidates, 1):
            self._echo(f"  {idx}) {name}")

        while True:
            answer = self.ask("Interface (number or name)")
            if answer.isdigit() and 1 <= int(answer) <= len(candidates):
                return candidates[int(answer) - 1]
            if answer in candidates:
                return answer
            self._echo(f"  Pick 1-{len(candidates)} or one of: {', '.join(candidates)}")

    def choose_mode(self) -> str:
        while True:
            answer = self.ask("Mode (static4/dhcp4)").lower()
            if answer in ("static", "static4"):
                return "static"
            if answer in ("dhcp", "dhcp4"):
                return "dhcp"
            self._echo("  Enter static4 or dhcp4")

    def complete_request(self, request: IntentRequest) -> IntentRequest:
        """Return a copy of ``request`` with mode, interface and address fields filled in.

        Values given on the command line are re-checked and re-asked when
        invalid; nothing is asked when both modes were given (that conflict is
        reported by the intent builder).
        """
        values = request.model_dump()
        if not request.static and not request.dhcp:
            values[self.choose_mode()] = True

        if values["interface"]:
            values["interface"] = self._recheck(
                "Interface (e.g. ens3, ens3.120)", values["interface"], check_interface_name
            )

        if values["static"] and not values["dhcp"]:
            values["cidr"] = self._recheck("IPv4/prefix (e.g. 192.168.10.5/24)", values["cidr"], parse_cidr)
            host = parse_cidr(values["cidr"])
            values["gateway"] = self._recheck(
                "Default IPv4 gateway", values["gateway"], lambda text: parse_gateway(host, text)
            )
            values["dns"] = self._recheck("DNS servers (comma-separated)", values["dns"], self._check_dns_required)
        elif values["dhcp"] and not values["static"] and values["dns"] is None:
            # --ip/--gw under DHCP is reported as a mode conflict, so nothing is asked
            static_fields = values["cidr"] or values["gateway"]
            if not static_fields and self.ask_yes_no("Override DNS servers from the DHCP lease?"):
                values["dns"] = self._recheck("DNS servers (comma-separated)", None, self._check_dns_required)

        return IntentRequest(**values)

    def _recheck(self, label: str, current: Optional[str], check: Callable[[str], Any]) -> str:
        if current:
            try:
                check(current)
                return current
            except AddressError as e:
                self._echo(f"  {e}")
        return self.ask_validated(label, check)

    @staticmethod
    def _check_dns_required(text: str) -> None:
        if not parse_dns_list(text):
            raise AddressError("At least one DNS server is required")
