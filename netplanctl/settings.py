"""Environment-driven settings."""

from __future__ import annotations

import os
from pathlib import Path
from typing import Mapping, Optional

from pydantic import BaseModel

from netplanctl.exceptions import FormatError

_TRUE_VALUES = ("1", "true", "yes", "on")
_FALSE_VALUES = ("0", "false", "no", "off")


def _env_bool(value: str, name: str) -> bool:
    lower = value.strip().lower()
    if lower in _TRUE_VALUES:
        return True
    if lower in _FALSE_VALUES:
        return False
    raise FormatError(f"{name} must be one of {', '.join(_TRUE_VALUES + _FALSE_VALUES)}, got {value!r}")


class Settings(BaseModel):
    netplan_dir: Path = Path("/etc/netplan")
    default_filename: str = "01-netcfg.yaml"
    netplan_bin: str = "netplan"
    ip_bin: str = "ip"
    command_timeout: Optional[float] = None
    require_root: bool = True

    @property
    def default_target(self) -> Path:
        return self.netplan_dir / self.default_filename

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> "Settings":
        """Build settings from ``NETPLANCTL_*`` environment variables."""
        env = os.environ if environ is None else environ
        values: dict = {}

        if env.get("NETPLANCTL_DIR"):
            values["netplan_dir"] = Path(env["NETPLANCTL_DIR"])
        if env.get("NETPLANCTL_DEFAULT_FILE"):
            values["default_filename"] = env["NETPLANCTL_DEFAULT_FILE"]
        if env.get("NETPLANCTL_NETPLAN_BIN"):
            values["netplan_bin"] = env["NETPLANCTL_NETPLAN_BIN"]
        if env.get("NETPLANCTL_IP_BIN"):
            values["ip_bin"] = env["NETPLANCTL_IP_BIN"]
        if env.get("NETPLANCTL_TIMEOUT"):
            try:
                values["command_timeout"] = float(env["NETPLANCTL_TIMEOUT"])
            except ValueError:
                raise FormatError(f"NETPLANCTL_TIMEOUT must be a number, got {env['NETPLANCTL_TIMEOUT']!r}") from None
            if not values["command_timeout"] > 0:
                raise FormatError(f"NETPLANCTL_TIMEOUT must be greater than 0, got {env['NETPLANCTL_TIMEOUT']!r}")
        if env.get("NETPLANCTL_REQUIRE_ROOT"):
            values["require_root"] = _env_bool(env["NETPLANCTL_REQUIRE_ROOT"], "NETPLANCTL_REQUIRE_ROOT")

        return cls(**values)
