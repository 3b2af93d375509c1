import json
import os
import tempfile
import threading
from contextlib import contextmanager
from pathlib import Path


class JsonStore:
    """Key-value store persisted as a single JSON file, grouped by collection.

    Layout on disk: ``{collection: {key: value}}``. ``put`` is an upsert.
    Every read and write holds the store lock, and the file is replaced
    atomically, so readers never see a half-written document.
    """

    def __init__(self, path: Path):
        self.path = Path(path)
        self._lock = threading.RLock()

    @contextmanager
    def transaction(self):
        """Hold the store lock across several calls, e.g. a check followed by a put."""
        with self._lock:
            yield self

    def _read_all(self) -> dict:
        if not self.path.exists():
            return {}
        return json.loads(self.path.read_text(encoding="utf-8"))

    def _write_all(self, data: dict) -> None:
        fd, tmp_name = tempfile.mkstemp(dir=self.path.parent, prefix=f".{self.path.name}.", suffix=".tmp")
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                json.dump(data, f, indent=2)
            os.replace(tmp_name, self.path)
        except BaseException:
            if os.path.exists(tmp_name):
                os.unlink(tmp_name)
            raise

    def get(self, collection: str, key: str) -> dict | None:
        with self._lock:
            return self._read_all().get(collection, {}).get(key)

    def values(self, collection: str) -> list[dict]:
        with self._lock:
            return list(self._read_all().get(collection, {}).values())

    def put(self, collection: str, key: str, value: dict) -> dict:
        with self._lock:
            data = self._read_all()
            data.setdefault(collection, {})[key] = value
            self._write_all(data)
        return value

    def delete(self, collection: str, key: str) -> bool:
        with self._lock:
            data = self._read_all()
            removed = data.get(collection, {}).pop(key, None)
            if removed is not None:
                self._write_all(data)
        return removed is not None
