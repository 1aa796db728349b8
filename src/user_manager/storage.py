"""JSON file persistence for the user collection.

The whole collection lives in one JSON array. Every load reads the full file
and every save overwrites it in full.
"""

from __future__ import annotations

import json
import os
import shutil
import tempfile
from pathlib import Path
from typing import List, Sequence

from .exceptions import CorruptStoreError, StorageError
from .logging_config import get_logger
from .models import User

logger = get_logger(__name__)

JSON_INDENT = 2


class JsonUserStore:
    """Reads and writes the user collection as a single JSON document.

    Args:
        path: Backing file. Created (with its parent directory) on first load.
        atomic_writes: Write to a temp file and rename it over the target.
        strict_load: Raise CorruptStoreError instead of returning an empty
            collection when the file holds valid JSON that is not an array.
    """

    def __init__(self, path: Path | str, atomic_writes: bool = False, strict_load: bool = False):
        self._path = Path(path)
        self.atomic_writes = atomic_writes
        self.strict_load = strict_load

    @property
    def path(self) -> Path:
        return self._path

    def load(self) -> List[User]:
        """Load every record from the backing file.

        Returns:
            Records in file order. Empty if the file was missing (it is
            created) or does not hold a JSON array.

        Raises:
            StorageError: If the file exists but cannot be read.
            CorruptStoreError: If the content is not valid JSON, or, in strict
                mode, if it is valid JSON but not an array.
        """
        if not self._path.exists():
            logger.info(f"Data file not found, creating empty store at {self._path}")
            self.save([])
            return []

        try:
            text = self._path.read_text(encoding="utf-8")
        except UnicodeDecodeError as e:
            raise StorageError(self._path, f"Encoding error: {e}") from e
        except OSError as e:
            raise StorageError(self._path, f"OS error: {e}") from e

        try:
            raw = json.loads(text)
        except json.JSONDecodeError as e:
            # unparsed content must never be overwritten by a later save
            raise CorruptStoreError(self._path, f"not valid JSON: {e}") from e

        if not isinstance(raw, list):
            return self._degrade(f"expected a JSON array, found {type(raw).__name__}")

        users = []
        for index, entry in enumerate(raw):
            if not isinstance(entry, dict):
                logger.warning(f"Skipping entry {index} in {self._path}: not an object")
                continue
            users.append(User.from_dict(entry))

        logger.debug(f"Loaded {len(users)} users from {self._path}")
        return users

    def save(self, users: Sequence[User]) -> None:
        """Overwrite the backing file with ``users``.

        Raises:
            StorageError: If the file cannot be written.
        """
        payload = [u.to_dict() for u in users]
        text = json.dumps(payload, indent=JSON_INDENT, ensure_ascii=False) + "\n"

        try:
            self._path.parent.mkdir(parents=True, exist_ok=True)
            if self.atomic_writes:
                self._replace(text)
            else:
                self._path.write_text(text, encoding="utf-8")
        except OSError as e:
            raise StorageError(self._path, f"OS error: {e}") from e

        logger.debug(f"Saved {len(payload)} users to {self._path}")

    def _replace(self, text: str) -> None:
        fd, tmp_path = tempfile.mkstemp(suffix=".tmp", dir=self._path.parent)
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                f.write(text)
                f.flush()
                os.fsync(f.fileno())
            # mkstemp creates 0600; keep the mode a plain write would give
            if self._path.exists():
                shutil.copymode(self._path, tmp_path)
            else:
                os.chmod(tmp_path, 0o666 & ~_current_umask())
            os.replace(tmp_path, self._path)
        except BaseException:
            try:
                os.unlink(tmp_path)
            except OSError:
                pass
            raise

    def _degrade(self, reason: str) -> List[User]:
        if self.strict_load:
            raise CorruptStoreError(self._path, reason)
        logger.warning(f"Ignoring contents of {self._path}: {reason}")
        return []


def _current_umask() -> int:
    mask = os.umask(0)
    os.umask(mask)
    return mask
