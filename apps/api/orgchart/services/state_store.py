from __future__ import annotations

"""Single-slot org chart state store with seed-on-first-read."""

import logging
import threading
from datetime import datetime, timezone
from typing import Any, Dict, Optional

from orgchart.core.config import get_settings
from orgchart.domain.defaults import default_state
from orgchart.domain.errors import InvalidInput, NotFound
from orgchart.services.backends import Document, StateBackend, build_backend

logger = logging.getLogger(__name__)

STATE_KEY = "orgchart:current"
TOPIC_FIELDS = ("customTrainingTopics", "availableTrainingTopics")


def _now() -> str:
    return datetime.now(timezone.utc).isoformat()


def _same_id(value: Any, employee_id: int) -> bool:
    # bool is an int subclass; a JSON true must not match employee 1.
    return not isinstance(value, bool) and value == employee_id


class OrgChartStore:
    """Reads and writes the one authoritative org chart record.

    Writes are read-modify-write against the backend without any
    cross-request locking, so concurrent replaces are last-write-wins.
    """

    def __init__(self, backend: StateBackend, key: str = STATE_KEY) -> None:
        self.backend = backend
        self.key = key

    def get_or_seed_state(self) -> Document:
        """Return the current state, persisting the default dataset if none exists."""
        state = self.backend.load(self.key)
        if state is not None:
            return state
        seed = default_state()
        seed["lastUpdated"] = _now()
        state = self.backend.create_if_absent(self.key, seed)
        logger.info("Using and saving initial default data (%d employees).", len(state.get("employees") or []))
        return state

    def replace_state(self, new_state: Any) -> Document:
        """Overwrite the stored roster and training topics with `new_state`."""
        if not isinstance(new_state, dict) or not isinstance(new_state.get("employees"), list):
            raise InvalidInput("Invalid data structure.")

        doc = self.backend.load(self.key)
        if doc is not None:
            doc["employees"] = new_state["employees"]
            for field in TOPIC_FIELDS:
                value = new_state.get(field)
                doc[field] = value if isinstance(value, list) else []
            doc["lastUpdated"] = _now()
        else:
            doc = dict(new_state)
            doc.setdefault("lastUpdated", _now())
        self.backend.save(self.key, doc)
        logger.info("Saved org chart state with %d employees.", len(doc["employees"]))
        return doc

    def set_employee_photo(self, employee_id: int, stored_path: str) -> Dict[str, Any]:
        """Point one employee's photo at `stored_path` and persist the record."""
        doc = self.backend.load(self.key)
        if doc is None:
            raise NotFound(f"Employee {employee_id} not found.")
        employee = next(
            (
                emp
                for emp in doc.get("employees") or []
                if isinstance(emp, dict) and _same_id(emp.get("id"), employee_id)
            ),
            None,
        )
        if employee is None:
            raise NotFound(f"Employee {employee_id} not found.")

        employee["photo"] = stored_path
        employee["lastUpdated"] = _now()
        self.backend.save(self.key, doc)
        logger.info("Updated photo for employee %s.", employee_id)
        return employee

    def reset(self) -> None:
        """Drop the stored state so the next read seeds again."""
        self.backend.clear(self.key)


_store: Optional[OrgChartStore] = None
_store_lock = threading.Lock()


def get_store() -> OrgChartStore:
    """Get the singleton store, building its backend from settings on first use."""
    global _store
    if _store is None:
        with _store_lock:
            if _store is None:
                _store = OrgChartStore(build_backend(get_settings()))
    return _store


def reset_store() -> None:
    """Forget the singleton so the next `get_store()` rereads settings."""
    global _store
    with _store_lock:
        _store = None
