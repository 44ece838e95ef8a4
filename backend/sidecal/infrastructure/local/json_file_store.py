"""
Local file system key/value store.
"""

from __future__ import annotations

import json
import os
import tempfile
from pathlib import Path
from typing import Any, Iterable, Optional

from sidecal.core.exceptions import InfrastructureError
from sidecal.core.logger import setup_logger
from sidecal.interfaces.key_value_store import IKeyValueStore

logger = setup_logger(__name__)


class JsonFileKeyValueStore(IKeyValueStore):
    """
    Key/value store backed by a single JSON document.

    Every write rewrites the whole document through a temporary file and
    ``os.replace``, so a reader sees either the old or the new content.
    """

    def __init__(self, base_path: Optional[str] = None, file_name: str = "storage.json"):
        """
        Initialize the JSON file store.

        Args:
            base_path: Directory holding the document (default: ./storage)
            file_name: Name of the JSON document
        """
        self.base_path = Path(base_path or "./storage")
        self.base_path.mkdir(parents=True, exist_ok=True)
        self.file_path = self.base_path / file_name

    async def get(self, key: str, default: Any = None) -> Any:
        """Get a value from the document."""
        return self._read().get(key, default)

    async def set(self, values: dict[str, Any]) -> None:
        """Merge values into the document and write it back."""
        data = self._read()
        data.update(values)
        self._write(data)

    async def remove(self, keys: str | Iterable[str]) -> None:
        """Remove keys from the document."""
        if isinstance(keys, str):
            keys = [keys]
        data = self._read()
        for key in keys:
            data.pop(key, None)
        self._write(data)

    def _read(self) -> dict[str, Any]:
        if not self.file_path.exists():
            return {}
        try:
            with open(self.file_path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, ValueError) as e:
            logger.error(f"Failed to read {self.file_path}: {e}")
            raise InfrastructureError(f"Failed to read storage file: {e}") from e
        if not isinstance(data, dict):
            raise InfrastructureError(
                f"Storage file {self.file_path} does not hold a JSON object"
            )
        return data

    def _write(self, data: dict[str, Any]) -> None:
        try:
            fd, tmp_path = tempfile.mkstemp(
                dir=self.base_path, prefix=".storage-", suffix=".tmp"
            )
            try:
                with os.fdopen(fd, "w", encoding="utf-8") as f:
                    json.dump(data, f, ensure_ascii=False)
                os.replace(tmp_path, self.file_path)
            except BaseException:
                Path(tmp_path).unlink(missing_ok=True)
                raise
        except (OSError, TypeError, ValueError) as e:
            logger.error(f"Failed to write {self.file_path}: {e}")
            raise InfrastructureError(f"Failed to write storage file: {e}") from e
