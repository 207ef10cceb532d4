"""Temp-file spool for deduplicated record text.

Keeps unique lines on disk between pipeline phases instead of holding
every record in memory. The spool owns its file and removes it on close,
whether the run succeeded or not.
"""

from __future__ import annotations

import logging
import os
import tempfile
from collections.abc import Iterator
from pathlib import Path
from typing import IO

from uno_groups.core.record import Record

logger = logging.getLogger(__name__)


class RecordSpool:
    """Append-then-replay store of record texts, one per line.

    Record ids are the line numbers in the spool, so replaying yields the
    same ids the indexer assigned.

    Usage:
        with RecordSpool() as spool:
            spool.append(record)
            for record in spool.records():
                ...
    """

    def __init__(self, directory: str | Path | None = None, encoding: str = "utf-8") -> None:
        self._directory = str(directory) if directory is not None else None
        self._encoding = encoding
        self._path: Path | None = None
        self._writer: IO[str] | None = None
        self._count = 0

    def __enter__(self) -> RecordSpool:
        self.open()
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def __len__(self) -> int:
        return self._count

    @property
    def path(self) -> Path | None:
        return self._path

    def open(self) -> None:
        if self._path is not None:
            raise RuntimeError("Spool is already open")
        fd, name = tempfile.mkstemp(prefix="uno_groups_", suffix=".dat", dir=self._directory)
        self._path = Path(name)
        self._writer = os.fdopen(fd, "w", encoding=self._encoding, newline="\n")
        logger.debug("Opened record spool at %s", self._path)

    def append(self, record: Record) -> None:
        if self._writer is None:
            raise RuntimeError("Spool is not open for writing")
        if record.id != self._count:
            raise ValueError(f"Expected record id {self._count}, got {record.id}")
        self._writer.write(record.text)
        self._writer.write("\n")
        self._count += 1

    def records(self) -> Iterator[Record]:
        """Replay the spooled records in id order."""
        path = self._finish_writing()
        with path.open(encoding=self._encoding, newline="\n") as f:
            for record_id, line in enumerate(f):
                yield Record(id=record_id, text=line[:-1] if line.endswith("\n") else line)

    def texts(self) -> list[str]:
        """Load every spooled text, indexed by record id."""
        return [record.text for record in self.records()]

    def close(self) -> None:
        if self._writer is not None:
            self._writer.close()
            self._writer = None
        if self._path is None:
            return
        try:
            self._path.unlink(missing_ok=True)
        except OSError:
            logger.warning("Failed to delete spool file %s", self._path, exc_info=True)
        else:
            logger.debug("Removed record spool at %s", self._path)
        self._path = None

    def _finish_writing(self) -> Path:
        if self._path is None:
            raise RuntimeError("Spool is not open")
        if self._writer is not None:
            self._writer.close()
            self._writer = None
        return self._path
