from __future__ import annotations

"""Keyed single-document persistence backends for the org chart state."""

import copy
import json
import logging
import threading
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any, Dict, Optional

import redis

from orgchart.core.config import Settings
from orgchart.domain.errors import BackendError

logger = logging.getLogger(__name__)

Document = Dict[str, Any]


class StateBackend(ABC):
    """Stores JSON-compatible documents under string keys."""

    @abstractmethod
    def load(self, key: str) -> Optional[Document]:
        """Return the document stored under `key`, or None."""

    @abstractmethod
    def save(self, key: str, doc: Document) -> None:
        """Replace the document stored under `key`."""

    @abstractmethod
    def create_if_absent(self, key: str, doc: Document) -> Document:
        """Store `doc` only if `key` is empty; return whichever document is stored."""

    @abstractmethod
    def clear(self, key: str) -> None:
        """Remove the document stored under `key`, if any."""


class InMemoryBackend(StateBackend):
    """Process-local backend; documents are copied in and out."""

    def __init__(self) -> None:
        self.lock = threading.Lock()
        self.docs: Dict[str, Document] = {}

    def load(self, key: str) -> Optional[Document]:
        with self.lock:
            doc = self.docs.get(key)
            return copy.deepcopy(doc) if doc is not None else None

    def save(self, key: str, doc: Document) -> None:
        with self.lock:
            self.docs[key] = copy.deepcopy(doc)

    def create_if_absent(self, key: str, doc: Document) -> Document:
        with self.lock:
            if key not in self.docs:
                self.docs[key] = copy.deepcopy(doc)
            return copy.deepcopy(self.docs[key])

    def clear(self, key: str) -> None:
        with self.lock:
            self.docs.pop(key, None)


class JsonFileBackend(StateBackend):
    """Keeps every slot in one JSON file, rewritten atomically on save."""

    def __init__(self, path: Path) -> None:
        self.path = Path(path)
        self.lock = threading.Lock()

    def _read_all(self) -> Dict[str, Document]:
        if not self.path.exists():
            return {}
        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
        except (OSError, ValueError) as exc:
            raise BackendError(f"Cannot read state file {self.path}") from exc
        if not isinstance(data, dict):
            raise BackendError(f"State file {self.path} does not hold a JSON object")
        return data

    def _write_all(self, data: Dict[str, Document]) -> None:
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            temp_path = self.path.with_suffix(".tmp")
            temp_path.write_text(json.dumps(data, indent=2, sort_keys=True), encoding="utf-8")
            temp_path.replace(self.path)
        except (OSError, TypeError, ValueError) as exc:
            raise BackendError(f"Cannot write state file {self.path}") from exc

    def load(self, key: str) -> Optional[Document]:
        with self.lock:
            return self._read_all().get(key)

    def save(self, key: str, doc: Document) -> None:
        with self.lock:
            data = self._read_all()
            data[key] = doc
            self._write_all(data)

    def create_if_absent(self, key: str, doc: Document) -> Document:
        with self.lock:
            data = self._read_all()
            if key not in data:
                data[key] = doc
                self._write_all(data)
            return data[key]

    def clear(self, key: str) -> None:
        with self.lock:
            data = self._read_all()
            if data.pop(key, None) is not None:
                self._write_all(data)


class RedisBackend(StateBackend):
    """Stores each slot as a JSON string; seeding relies on SET NX."""

    def __init__(self, url: str = "redis://localhost:6379/0", client=None) -> None:
        self.redis = client if client is not None else redis.Redis.from_url(url)

    def load(self, key: str) -> Optional[Document]:
        try:
            raw = self.redis.get(key)
            return json.loads(raw) if raw is not None else None
        except (redis.RedisError, ValueError) as exc:
            raise BackendError(f"Cannot load {key} from redis") from exc

    def save(self, key: str, doc: Document) -> None:
        try:
            self.redis.set(key, json.dumps(doc))
        except (redis.RedisError, TypeError, ValueError) as exc:
            raise BackendError(f"Cannot save {key} to redis") from exc

    def create_if_absent(self, key: str, doc: Document) -> Document:
        try:
            if self.redis.set(key, json.dumps(doc), nx=True):
                return doc
            raw = self.redis.get(key)
        except (redis.RedisError, TypeError, ValueError) as exc:
            raise BackendError(f"Cannot seed {key} in redis") from exc
        if raw is None:
            raise BackendError(f"{key} vanished from redis while seeding")
        try:
            return json.loads(raw)
        except ValueError as exc:
            raise BackendError(f"Corrupt document under {key}") from exc

    def clear(self, key: str) -> None:
        try:
            self.redis.delete(key)
        except redis.RedisError as exc:
            raise BackendError(f"Cannot delete {key} from redis") from exc


def build_backend(settings: Settings) -> StateBackend:
    """Pick the backend named by the STATE_BACKEND setting."""
    name = settings.state_backend
    if name == "json":
        logger.info("Using JSON state file at %s", settings.state_file_path)
        return JsonFileBackend(settings.state_file_path)
    if name == "redis":
        logger.info("Using redis state backend at %s", settings.redis_url)
        return RedisBackend(settings.redis_url)
    if name != "memory":
        logger.warning("Unknown STATE_BACKEND %r, falling back to memory", name)
    return InMemoryBackend()
