"""Netplan IPv4 configuration generator.

Validates a single-interface IPv4 configuration (static or DHCP, plain or
VLAN), renders it as Netplan YAML, backs up and replaces the target file and
hands it to ``netplan generate`` / ``netplan apply``.
"""

__version__ = "0.0.1"

import os
import sys
from typing import Any, Callable, Dict

from loguru import logger as glogger

glogger.disable(__name__)


def _loguru_skiplog_filter(record: dict) -> bool:  # type: ignore[type-arg]
    """Filter function to hide records with ``extra['skiplog']`` set."""
    return not record.get("extra", {}).get("skiplog", False)


def configure_logging(
    loguru_filter: Callable[[Dict[str, Any]], bool] = _loguru_skiplog_filter,
) -> None:
    """Configure a default ``loguru`` sink with a convenient format and filter."""
    os.environ["LOGURU_LEVEL"] = os.getenv("LOGURU_LEVEL", "DEBUG")
    glogger.remove()
    logger_fmt: str = (
        "<green>{time:YYYY-MM-DD HH:mm:ss.SSS}</green> | <level>{level: <8}</level> | <cyan>{module}</cyan>::<cyan>{extra[classname]}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> - <level>{message}</level>"
    )
    glogger.add(sys.stderr, level=os.getenv("LOGURU_LEVEL"), format=logger_fmt, filter=loguru_filter)  # type: ignore[arg-type]
    glogger.configure(extra={"classname": "None", "skiplog": False})
    glogger.enable(__name__)


from netplanctl.addressing import parse_address, parse_cidr, validate_gateway_same_subnet  # noqa: E402
from netplanctl.document import ConfigDocument, build_document, render_yaml  # noqa: E402
from netplanctl.exceptions import (  # noqa: E402
    AmbiguousInterfaceError,
    ApplyError,
    BackupError,
    DegenerateAddressError,
    FormatError,
    ModeConflictError,
    NetplanCtlError,
    NoInterfaceError,
    RangeError,
    SubnetMismatchError,
    ValidationError,
)
from netplanctl.intent import build_intent  # noqa: E402
from netplanctl.interfaces import InterfaceClassifier, classify  # noqa: E402
from netplanctl.models import ConfigIntent, IntentRequest  # noqa: E402
from netplanctl.runner import NetplanRunner  # noqa: E402
from netplanctl.settings import Settings  # noqa: E402
from netplanctl.writer import SafeWriter  # noqa: E402

__all__ = [
    "glogger",
    "configure_logging",
    "parse_address",
    "parse_cidr",
    "validate_gateway_same_subnet",
    "classify",
    "InterfaceClassifier",
    "IntentRequest",
    "ConfigIntent",
    "build_intent",
    "ConfigDocument",
    "build_document",
    "render_yaml",
    "SafeWriter",
    "NetplanRunner",
    "Settings",
    "NetplanCtlError",
    "FormatError",
    "RangeError",
    "SubnetMismatchError",
    "DegenerateAddressError",
    "ModeConflictError",
    "NoInterfaceError",
    "AmbiguousInterfaceError",
    "BackupError",
    "ValidationError",
    "ApplyError",
]
