"""Exception hierarchy for netplan configuration."""

from __future__ import annotations

from pathlib import Path


class NetplanCtlError(Exception):
    """Base exception for all netplanctl errors."""


class AddressError(NetplanCtlError):
    """IPv4 address, prefix or gateway validation failed."""


class FormatError(AddressError):
    """Malformed address, CIDR or interface name text."""


class RangeError(AddressError):
    """Value out of range, or a host address that is its subnet's network/broadcast."""


class SubnetMismatchError(AddressError):
    """Gateway is not inside the host's subnet."""


class DegenerateAddressError(AddressError):
    """Gateway equals the network, broadcast or host address."""


class IntentError(NetplanCtlError):
    """Requested configuration is inconsistent or incomplete."""


class ModeConflictError(IntentError):
    """Static and DHCP both (or neither) requested, or static fields under DHCP."""


class MissingFieldError(IntentError):
    """A field required by the selected mode was not supplied."""

    def __init__(self, message: str, fields: list[str] | None = None):
        self.fields = fields or []
        super().__init__(message)


class InterfaceError(NetplanCtlError):
    """Interface resolution failed."""


class NoInterfaceError(InterfaceError):
    """No candidate interface was found."""


class AmbiguousInterfaceError(InterfaceError):
    """Several candidate interfaces and no way to pick one."""

    def __init__(self, message: str, candidates: list[str] | None = None):
        self.candidates = candidates or []
        super().__init__(message)


class WriteError(NetplanCtlError):
    """Persisting the configuration file failed."""


class BackupError(WriteError):
    """Copying the existing file to its backup failed; nothing was written."""

    def __init__(self, message: str, target: Path | None = None):
        self.target = target
        super().__init__(message)


class PrivilegeError(NetplanCtlError):
    """The operation needs root privileges."""


class CommandError(NetplanCtlError):
    """An external netplan command reported failure."""

    def __init__(self, message: str, returncode: int | None = None, diagnostic: str = ""):
        self.returncode = returncode
        self.diagnostic = diagnostic
        super().__init__(message)


class ValidationError(CommandError):
    """``netplan generate`` rejected the written configuration."""


class ApplyError(CommandError):
    """``netplan apply`` failed."""
