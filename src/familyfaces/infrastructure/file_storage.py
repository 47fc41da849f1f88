"""File-backed BlobStorage: one JSON object on disk mapping key -> blob."""

import json
import logging
from pathlib import Path

logger = logging.getLogger(__name__)


class JsonFileBlobStorage:
    """Stores blobs in a single JSON file. Parent directories are created on first write."""

    def __init__(self, path: Path | str) -> None:
        self._path = Path(path)

    @property
    def path(self) -> Path:
        return self._path

    def _read_all(self) -> dict[str, str]:
        if not self._path.exists():
            return {}
        obj = json.loads(self._path.read_text(encoding="utf-8"))
        if not isinstance(obj, dict):
            raise ValueError(f"{self._path} does not hold a JSON object.")
        return obj

    def get(self, key: str) -> str | None:
        value = self._read_all().get(key)
        if value is not None and not isinstance(value, str):
            raise ValueError(f"Blob {key!r} in {self._path} is not a string.")
        return value

    def put(self, key: str, value: str) -> None:
        try:
            obj = self._read_all()
        except ValueError:
            logger.warning("Overwriting unreadable storage file %s", self._path)
            obj = {}
        obj[key] = value
        self._path.parent.mkdir(parents=True, exist_ok=True)
        self._path.write_text(json.dumps(obj), encoding="utf-8")
