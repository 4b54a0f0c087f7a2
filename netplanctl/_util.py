"""Shared subprocess and validation helpers."""

from __future__ import annotations

import re
import subprocess
from pathlib import Path

from loguru import logger

# Linux IFNAMSIZ is 16 including the terminating NUL
_MAX_IFNAME_LEN = 15


def _run_cmd(cmd: list[str], timeout: float | None = 30) -> str:
    """Run a subprocess command and return stdout ("" when it cannot run)."""
    try:
        result = subprocess.run(cmd, capture_output=True, text=True, timeout=timeout)
        return result.stdout
    except (subprocess.TimeoutExpired, FileNotFoundError) as e:
        logger.debug(f"Command {cmd[0]} failed: {e}")
        return ""


def _run_checked(
    cmd: list[str], timeout: float | None = None, cwd: Path | None = None
) -> subprocess.CompletedProcess[str]:
    """Run a command, capturing stdout/stderr; the caller inspects the return code.

    FileNotFoundError and TimeoutExpired propagate to the caller.
    """
    logger.debug(f"Running {' '.join(cmd)}" + (f" (cwd={cwd})" if cwd else ""))
    return subprocess.run(cmd, capture_output=True, text=True, timeout=timeout, cwd=cwd, check=False)


def _validate_interface_name(name: str) -> bool:
    """Validate interface name to prevent injection and over-long names."""
    return len(name) <= _MAX_IFNAME_LEN and bool(re.fullmatch(r"[a-zA-Z0-9._-]+", name))
