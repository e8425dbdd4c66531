"""
JSON document store for flock data.

All flocks live in a single JSON file.  ``DocumentStore.load`` returns
the full list and ``DocumentStore.save`` rewrites the whole file.  The
read path is forgiving: a missing, empty or unparsable file yields an
empty list, and a flock that fails validation is skipped while the
others are kept.  Before such a damaged document is overwritten it is
copied aside to ``<name>.corrupt``.  Write failures are raised as
``StorageError`` so the request fails instead of pretending to succeed.

``get_store`` builds a store for the configured ``DATA_FILE``; it is
called once per request so tests can point ``settings.data_file`` at a
temporary location.
"""

import json
import logging
import os
import shutil
import tempfile
from pathlib import Path
from typing import Any, List

from pydantic import ValidationError

from ..schemas.flock import Flock
from .config import settings
from .exceptions import StorageError

logger = logging.getLogger(__name__)


def get_data_path() -> Path:
    """Compute the path to the flock document.

    If ``settings.data_file`` is an absolute path, use it directly.
    Otherwise resolve it relative to the package install root.
    """
    data_file = Path(settings.data_file)
    if data_file.is_absolute():
        return data_file
    base_dir = Path(__file__).resolve().parent.parent.parent  # flock_records_api/
    return (base_dir / data_file).resolve()


class DocumentStore:
    """Loads and persists the list of flocks as one JSON document."""

    def __init__(self, path: Path) -> None:
        self.path = Path(path)
        # Set by ``load`` when part of the document could not be read.
        self.damaged = False

    @property
    def backup_path(self) -> Path:
        return self.path.with_name(f"{self.path.name}.corrupt")

    def load(self) -> List[Flock]:
        self.damaged = False
        try:
            if not self.path.exists() or self.path.stat().st_size == 0:
                return []
            data: Any = json.loads(self.path.read_text(encoding="utf-8"))
        except (OSError, ValueError) as exc:
            logger.warning("Could not read flock data from %s, treating as empty: %s", self.path, exc)
            self.damaged = True
            return []
        if not isinstance(data, list):
            logger.warning("Flock data in %s is not a list, treating as empty", self.path)
            self.damaged = True
            return []

        flocks = []
        for index, item in enumerate(data):
            try:
                flocks.append(Flock.model_validate(item))
            except ValidationError as exc:
                logger.warning("Skipping unreadable flock #%d in %s: %s", index, self.path, exc)
                self.damaged = True
        return flocks

    def save(self, flocks: List[Flock]) -> None:
        """Overwrite the document with ``flocks``.

        The data is written to a temporary file next to the target and
        then moved into place, so readers see either the old or the new
        document.  If the last ``load`` had to drop data, the old file is
        first copied to ``backup_path``.
        """
        payload = [flock.model_dump(by_alias=True, mode="json") for flock in flocks]
        text = json.dumps(payload, indent=2, ensure_ascii=False)
        tmp_name = None
        try:
            if self.damaged and self.path.exists():
                shutil.copyfile(self.path, self.backup_path)
                logger.warning("Kept unreadable flock data as %s", self.backup_path)
            self.path.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(
                prefix=f".{self.path.name}.", suffix=".tmp", dir=str(self.path.parent)
            )
            with os.fdopen(fd, "w", encoding="utf-8") as fh:
                fh.write(text)
            os.replace(tmp_name, self.path)
        except OSError as exc:
            logger.error("Failed to write flock data to %s: %s", self.path, exc)
            if tmp_name and os.path.exists(tmp_name):
                os.unlink(tmp_name)
            raise StorageError(f"Could not write flock data: {exc}") from exc
        self.damaged = False
        logger.info("Wrote %d flock(s) to %s", len(flocks), self.path)


def get_store() -> DocumentStore:
    """Return a store for the configured data file."""
    return DocumentStore(get_data_path())
