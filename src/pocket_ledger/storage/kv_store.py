from __future__ import annotations

import re
from pathlib import Path

_SAFE_KEY = re.compile(r"[^A-Za-z0-9._-]")


class KeyValueStore:
    """
    Durable string slots on local disk, one file per key:

      .cache/ledger/<key>.json

    get_item / set_item mirror a browser's local storage.
    Writes go to a temp file first and are then renamed over the target.
    """

    def __init__(self, root_dir: Path | None = None):
        self.root_dir = root_dir or (Path(".cache") / "ledger")
        self.root_dir.mkdir(parents=True, exist_ok=True)

    def _path(self, key: str) -> Path:
        name = _SAFE_KEY.sub("_", key.strip())
        if not name:
            raise ValueError("storage key must not be empty")
        return self.root_dir / f"{name}.json"

    def get_item(self, key: str) -> str | None:
        path = self._path(key)
        if not path.exists():
            return None
        return path.read_text(encoding="utf-8")

    def set_item(self, key: str, value: str) -> None:
        path = self._path(key)
        tmp = path.with_suffix(".json.tmp")
        try:
            tmp.write_text(value, encoding="utf-8")
            tmp.replace(path)
        except OSError:
            tmp.unlink(missing_ok=True)
            raise
