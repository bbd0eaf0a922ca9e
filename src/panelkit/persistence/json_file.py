"""Configuration documents stored as one JSON file per domain."""

from __future__ import annotations

import json
import threading
from pathlib import Path
from typing import Any

from panelkit.persistence.base import ConfigDomainPersistence


class JsonFileConfigPersistence(ConfigDomainPersistence):
    """Keeps ``{key: value}`` for the domain in ``<directory>/<domain>.json``."""

    def __init__(self, domain: str, directory: str | Path) -> None:
        super().__init__(domain)
        self._path = Path(directory) / f"{domain}.json"
        self._lock = threading.Lock()

    @property
    def path(self) -> Path:
        """Backing file."""
        return self._path

    def setup(self) -> None:
        self._path.parent.mkdir(parents=True, exist_ok=True)
        if not self._path.exists():
            self._write({})

    def _read(self) -> dict[str, Any]:
        if not self._path.exists():
            return {}
        with self._path.open(encoding="utf-8") as f:
            return json.load(f)

    def _write(self, data: dict[str, Any]) -> None:
        self._path.parent.mkdir(parents=True, exist_ok=True)
        tmp_path = self._path.with_suffix(".json.tmp")
        with tmp_path.open("w", encoding="utf-8") as f:
            json.dump(data, f, indent=2, sort_keys=True, default=str)
        tmp_path.replace(self._path)

    def get_all_items(self) -> list[Any]:
        data = self._read()
        return [data[key] for key in sorted(data)]

    def get_item(self, key: str, default: Any = None) -> Any:
        return self._read().get(key, default)

    def upsert_item(self, key: str, value: Any) -> None:
        with self._lock:
            data = self._read()
            data[key] = value
            self._write(data)

    def remove_item(self, key: str) -> None:
        with self._lock:
            data = self._read()
            if key in data:
                del data[key]
                self._write(data)

    def reset_state(self, key_field: str, items: list[dict[str, Any]]) -> None:
        with self._lock:
            self._write({str(item[key_field]): item for item in items})

    def list_keys(self) -> list[str]:
        return sorted(self._read())
