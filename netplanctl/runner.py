"""Invocation of ``netplan generate`` and ``netplan apply``."""

from __future__ import annotations

import subprocess
from pathlib import Path
from typing import Optional

from loguru import logger

from netplanctl._util import _run_checked
from netplanctl.exceptions import ApplyError, CommandError, ValidationError


class NetplanRunner:
    """Thin wrapper around the netplan binary.

    Each call blocks until netplan exits; ``timeout`` is None (no limit)
    unless configured.
    """

    def __init__(self, binary: str = "netplan", timeout: Optional[float] = None, cwd: Optional[Path] = None):
        self.binary = binary
        self.timeout = timeout
        self.cwd = cwd

    def _run(self, action: str, error_cls: type[CommandError]) -> str:
        cmd = [self.binary, action]
        try:
            result = _run_checked(cmd, timeout=self.timeout, cwd=self.cwd)
        except FileNotFoundError:
            raise error_cls(f"'{self.binary}' not found. Is netplan installed?") from None
        except subprocess.TimeoutExpired:
            raise error_cls(f"'{self.binary} {action}' did not finish within {self.timeout}s") from None

        if result.returncode != 0:
            diagnostic = result.stderr or ""
            message = f"'{self.binary} {action}' failed with exit status {result.returncode}"
            if diagnostic.strip():
                message += f": {diagnostic.strip().splitlines()[-1]}"
            raise error_cls(message, returncode=result.returncode, diagnostic=diagnostic)

        logger.debug(f"'{self.binary} {action}' succeeded")
        return result.stdout

    def validate(self) -> None:
        """Run ``netplan generate``; raise ValidationError if it rejects the configuration."""
        self._run("generate", ValidationError)

    def apply(self) -> None:
        """Run ``netplan apply``; raise ApplyError on failure."""
        self._run("apply", ApplyError)
