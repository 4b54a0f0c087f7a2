"""Backup-then-replace persistence of netplan documents."""

from __future__ import annotations

import shutil
from datetime import datetime
from pathlib import Path
from typing import Callable

from loguru import logger

from netplanctl.document import ConfigDocument, render_yaml
from netplanctl.exceptions import BackupError, WriteError
from netplanctl.models import WriteResult

BACKUP_TIMESTAMP_FORMAT = "%Y%m%d-%H%M%S"
NEW_FILE_MODE = 0o600


def backup_path_for(target: Path, timestamp: str) -> Path:
    """``<target>.bak.<timestamp>``, with ``.1``, ``.2``, ... appended if taken."""
    candidate = target.with_name(f"{target.name}.bak.{timestamp}")
    counter = 0
    while candidate.exists():
        counter += 1
        candidate = target.with_name(f"{target.name}.bak.{timestamp}.{counter}")
    return candidate


class SafeWriter:
    """Persist a document to its target, backing up any existing file first.

    The target is rewritten in place; there is no temp-file/rename swap, so an
    interruption during the write can leave it truncated. The backup taken
    beforehand is left for manual recovery and never pruned.
    """

    def __init__(self, clock: Callable[[], datetime] = datetime.now) -> None:
        self.clock = clock

    def backup(self, target: Path) -> Path:
        backup = backup_path_for(target, self.clock().strftime(BACKUP_TIMESTAMP_FORMAT))
        try:
            shutil.copy2(target, backup)
        except OSError as e:
            raise BackupError(f"Could not back up {target} to {backup}: {e}", target=target) from e
        logger.info(f"Backed up {target} to {backup}")
        return backup

    def persist(self, document: ConfigDocument, target: Path) -> WriteResult:
        text = render_yaml(document)

        try:
            target.parent.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise WriteError(f"Could not create {target.parent}: {e}") from e

        created = not target.exists()
        backup = None if created else self.backup(target)

        try:
            target.write_text(text)
            if created:
                target.chmod(NEW_FILE_MODE)
        except OSError as e:
            raise WriteError(f"Could not write {target}: {e}") from e

        logger.info(f"Wrote {len(text.encode())} bytes to {target}")
        return WriteResult(target=target, backup=backup, created=created, bytes_written=len(text.encode()))
