"""CLI entry point for netplan configuration, usable standalone.

Examples:
  # Static IPv4 on a plain NIC
  sudo netplanctl --static4 --iface ens3 --ip 10.120.80.10/27 --gw 10.120.80.1 --dns 1.1.1.1,8.8.8.8

  # Static IPv4 on a VLAN (ens3.120 becomes a netplan vlans: entry)
  sudo netplanctl --static4 --iface ens3.120 --ip 10.120.80.10/27 --gw 10.120.80.1 --dns 1.1.1.1

  # DHCPv4 with DNS override
  sudo netplanctl dhcp4 --iface ens3 --dns 9.9.9.9,1.1.1.1

  # Print the YAML only / write and validate without applying
  netplanctl --dhcp4 --iface ens3 --dry-run
  sudo netplanctl --static4 --iface ens3 --ip 192.168.0.10/24 --gw 192.168.0.1 --dns 1.1.1.1 --validate-only

  # List detected real interfaces and exit
  netplanctl --list-ifaces
"""

from __future__ import annotations

import argparse
import os
import platform
import sys
from typing import Optional

from loguru import logger
from tabulate import tabulate

from netplanctl import __version__
from netplanctl.document import build_document, render_yaml
from netplanctl.exceptions import CommandError, IntentError, NetplanCtlError, PrivilegeError
from netplanctl.formatters import InterfaceListFormatter, PreviewFormatter
from netplanctl.intent import build_intent
from netplanctl.interfaces import InterfaceClassifier
from netplanctl.models import ConfigIntent, IntentRequest
from netplanctl.prompts import InteractivePrompter
from netplanctl.runner import NetplanRunner
from netplanctl.settings import Settings
from netplanctl.writer import SafeWriter

_POSITIONAL_MODES = ("dhcp4", "static4")


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser for netplan configuration."""
    parser = argparse.ArgumentParser(
        prog="netplanctl",
        description="Generate and apply Netplan YAML (IPv4 static or DHCP) for a single interface",
        epilog="--dhcp4 and --static4 are mutually exclusive. Static mode requires --ip, --gw and --dns.",
    )
    parser.add_argument(
        "mode",
        nargs="?",
        choices=_POSITIONAL_MODES,
        help="Shorthand for --dhcp4 / --static4",
    )

    modes = parser.add_argument_group("modes (pick exactly one)")
    modes.add_argument("--dhcp4", action="store_true", help="Enable DHCPv4 on the interface")
    modes.add_argument("--static4", action="store_true", help="Static IPv4 (requires --ip, --gw, --dns)")

    parser.add_argument("--iface", help="Interface name (e.g. ens3, enp0s3, bond0, ens3.120)")

    static = parser.add_argument_group("static IPv4 options")
    static.add_argument("--ip", dest="cidr", metavar="CIDR", help="IPv4/prefix (e.g. 192.168.10.5/24)")
    static.add_argument("--gw", dest="gateway", metavar="IPV4", help="Default IPv4 gateway")
    static.add_argument(
        "--dns",
        metavar="LIST",
        help="Comma-separated IPv4 DNS servers (e.g. 1.1.1.1,8.8.8.8); DNS override in DHCP mode",
    )

    general = parser.add_argument_group("general options")
    general.add_argument(
        "--file",
        dest="target_file",
        metavar="PATH",
        help="Netplan YAML to write (default: first file in the netplan dir, else 01-netcfg.yaml)",
    )
    general.add_argument("--dry-run", action="store_true", help="Print YAML only; do not write or apply")
    general.add_argument(
        "--validate-only", action="store_true", help="Write and run 'netplan generate', do not apply"
    )
    general.add_argument("--list-ifaces", action="store_true", help="Print detected real interfaces and exit")
    general.add_argument(
        "--all-ifaces",
        action="store_true",
        help="Do not filter out virtual/container/tunnel interfaces",
    )
    general.add_argument(
        "-i",
        "--interactive",
        action="store_true",
        help="Ask for missing or invalid values instead of failing",
    )
    general.add_argument("-v", "--verbose", action="store_true", help="Verbose logging")
    return parser


def parse_args(args: list[str] | None = None) -> argparse.Namespace:
    return build_parser().parse_args(args)


def build_request(parsed: argparse.Namespace) -> IntentRequest:
    return IntentRequest(
        static=parsed.static4 or parsed.mode == "static4",
        dhcp=parsed.dhcp4 or parsed.mode == "dhcp4",
        interface=parsed.iface,
        cidr=parsed.cidr,
        gateway=parsed.gateway,
        dns=parsed.dns,
        target_file=parsed.target_file,
        include_all=parsed.all_ifaces,
    )


def _print_startup_banner(settings: Settings) -> None:
    rows = [
        ["version", __version__],
        ["python", platform.python_version()],
        ["netplan dir", str(settings.netplan_dir)],
        ["netplan", settings.netplan_bin],
        ["timeout", "none" if settings.command_timeout is None else str(settings.command_timeout)],
    ]
    logger.opt(raw=True).debug("\n{}\n", tabulate(rows, tablefmt="mixed_grid"))


def _require_root(settings: Settings) -> None:
    if settings.require_root and os.geteuid() != 0:
        raise PrivilegeError("Run as root (sudo), or set NETPLANCTL_REQUIRE_ROOT=0 for a writable target.")


def cmd_list_interfaces(classifier: InterfaceClassifier, parsed: argparse.Namespace) -> None:
    """Print candidate interfaces."""
    names = classifier.list_candidate_interfaces(include_all=parsed.all_ifaces)
    if not names:
        logger.warning("No candidate interfaces found")
        return
    print(InterfaceListFormatter(names, classifier).format(detailed=parsed.verbose))


def cmd_configure(
    intent: ConfigIntent,
    settings: Settings,
    dry_run: bool = False,
    validate_only: bool = False,
    writer: Optional[SafeWriter] = None,
    runner: Optional[NetplanRunner] = None,
) -> None:
    """Preview, then write, validate and apply the configuration for ``intent``."""
    document = build_document(intent)
    print(PreviewFormatter(intent).format())

    if dry_run:
        print()
        print(render_yaml(document), end="")
        print()
        print("Dry-run: YAML printed above. No changes written or applied.")
        return

    _require_root(settings)
    writer = writer or SafeWriter()
    runner = runner or NetplanRunner(
        settings.netplan_bin, timeout=settings.command_timeout, cwd=intent.target_file.parent
    )

    result = writer.persist(document, intent.target_file)
    if result.backup:
        print(f"Backup: {result.backup}")

    runner.validate()
    if validate_only:
        print("Validation: 'netplan generate' succeeded. Configuration not applied.")
        return

    runner.apply()
    print(f"Done: interface {intent.interface.name} configured. YAML saved at: {result.target}")


def main(args: list[str] | None = None) -> None:
    """Main entry point for netplan configuration CLI."""
    if args is None:
        args = sys.argv[1:]
    parser = build_parser()
    if not args:
        parser.print_help()
        sys.exit(1)

    parsed = parser.parse_args(args)

    if not parsed.verbose:
        logger.remove()
        logger.add(sys.stderr, level="INFO", format="<level>{level: <8}</level> {message}")
    logger.enable("netplanctl")

    try:
        settings = Settings.from_env()
        if parsed.verbose:
            _print_startup_banner(settings)

        classifier = InterfaceClassifier(ip_bin=settings.ip_bin)
        if parsed.list_ifaces:
            cmd_list_interfaces(classifier, parsed)
            return

        request = build_request(parsed)
        chooser = None
        if parsed.interactive:
            prompter = InteractivePrompter()
            request = prompter.complete_request(request)
            chooser = prompter.choose_interface

        intent = build_intent(request, classifier, settings, chooser=chooser)
        cmd_configure(intent, settings, dry_run=parsed.dry_run, validate_only=parsed.validate_only)
    except CommandError as e:
        if e.diagnostic:
            print(e.diagnostic, file=sys.stderr, end="" if e.diagnostic.endswith("\n") else "\n")
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)
    except IntentError as e:
        print(f"Error: {e}", file=sys.stderr)
        parser.print_usage(sys.stderr)
        sys.exit(1)
    except NetplanCtlError as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)
    except KeyboardInterrupt:
        print("\nAborted.", file=sys.stderr)
        sys.exit(130)


if __name__ == "__main__":
    main()
