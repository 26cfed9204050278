import threading

from fastapi import Depends
from sqlalchemy.orm import Session

from perfboard.core.config import settings
from perfboard.core.events import change_feed
from perfboard.db.session import get_db
from perfboard.storage.base import EvaluationStore
from perfboard.storage.fixtures import demo_employees, demo_evaluations
from perfboard.storage.json_file import JsonFileStore
from perfboard.storage.memory import MemoryStore
from perfboard.storage.sql import SqlStore

BACKENDS = ("sql", "memory", "json")

_local_store: EvaluationStore | None = None
_local_store_lock = threading.Lock()


def build_local_store(backend: str = settings.STORAGE_BACKEND) -> EvaluationStore:
    """Process-wide store for the backends that do not need a DB session."""
    if backend == "memory":
        if settings.SEED_DEMO_DATA:
            return MemoryStore(demo_employees(), demo_evaluations(), feed=change_feed)
        return MemoryStore(feed=change_feed)
    if backend == "json":
        return JsonFileStore(settings.JSON_STORE_PATH, feed=change_feed)
    raise ValueError(f"Unknown storage backend: {backend!r} (expected one of {BACKENDS})")


def get_store(db: Session = Depends(get_db)) -> EvaluationStore:
    global _local_store
    if settings.STORAGE_BACKEND == "sql":
        return SqlStore(db, feed=change_feed)
    if _local_store is None:
        # request handlers run in a thread pool; build exactly one store
        with _local_store_lock:
            if _local_store is None:
                _local_store = build_local_store()
    return _local_store


__all__ = [
    "BACKENDS",
    "EvaluationStore",
    "JsonFileStore",
    "MemoryStore",
    "SqlStore",
    "build_local_store",
    "get_store",
]
