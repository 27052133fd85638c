"""Persistence port for the two-slot profile payload."""
from __future__ import annotations

import copy
import json
from pathlib import Path
from typing import Any, Dict, Protocol

from spire import config

from .errors import DataLoadError
from .json_loader import load_json


class ProfileStore(Protocol):
    """Opaque key-value store holding one serialized profile payload."""

    def read(self) -> Dict[str, Any] | None:
        """Return the stored payload, or None when nothing was saved yet."""
        ...

    def write(self, payload: Dict[str, Any]) -> None:
        ...


class JsonFileProfileStore:
    """Keeps the payload in a single JSON file on disk."""

    def __init__(self, path: Path | str | None = None) -> None:
        self._path = Path(path) if path is not None else config.get_profiles_path()

    @property
    def path(self) -> Path:
        return self._path

    def read(self) -> Dict[str, Any] | None:
        if not self._path.exists():
            return None
        raw = load_json(self._path)
        if not isinstance(raw, dict):
            raise DataLoadError(f"Expected a JSON object in {self._path}")
        return raw

    def write(self, payload: Dict[str, Any]) -> None:
        self._path.parent.mkdir(parents=True, exist_ok=True)
        self._path.write_text(json.dumps(payload, indent=2, sort_keys=True), encoding="utf-8")

    def clear(self) -> None:
        try:
            self._path.unlink()
        except FileNotFoundError:
            return


class InMemoryProfileStore:
    """Store kept in memory; payloads are deep-copied on the way in and out."""

    def __init__(self, payload: Dict[str, Any] | None = None) -> None:
        self._payload = copy.deepcopy(payload)
        self.write_count = 0

    def read(self) -> Dict[str, Any] | None:
        return copy.deepcopy(self._payload)

    def write(self, payload: Dict[str, Any]) -> None:
        self._payload = copy.deepcopy(payload)
        self.write_count += 1
