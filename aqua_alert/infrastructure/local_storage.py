"""
Durable key/value storage with browser localStorage semantics.

Usage:
    from ..infrastructure.local_storage import LocalStorage

    storage = LocalStorage("sqlite:///./aqua_alert.db")
    storage.set_item("aqua-alert-user", '{"name": "Jane", "email": "jane@x.com"}')
    storage.get_item("aqua-alert-user")
    storage.remove_item("aqua-alert-user")

No versioning and no schema migration: values are stored exactly as given.
"""
import logging
from typing import Optional

from .database import Base, create_storage_engine, create_session_factory
from .models import StorageItem

logger = logging.getLogger(__name__)


class LocalStorage:
    def __init__(self, url: str):
        self.engine = create_storage_engine(url)
        self._session_factory = create_session_factory(self.engine)
        Base.metadata.create_all(bind=self.engine)

    def get_item(self, key: str) -> Optional[str]:
        with self._session_factory() as db:
            item = db.get(StorageItem, key)
            return item.value if item else None

    def set_item(self, key: str, value: str) -> None:
        with self._session_factory() as db:
            item = db.get(StorageItem, key)
            if item is None:
                db.add(StorageItem(key=key, value=value))
            else:
                item.value = value
            db.commit()
        logger.debug(f"Stored local storage key '{key}'")

    def remove_item(self, key: str) -> None:
        with self._session_factory() as db:
            item = db.get(StorageItem, key)
            if item is not None:
                db.delete(item)
                db.commit()
                logger.debug(f"Removed local storage key '{key}'")

    def clear(self) -> None:
        with self._session_factory() as db:
            db.query(StorageItem).delete()
            db.commit()

    def close(self) -> None:
        """Release pooled connections. Data in a file-backed store survives."""
        self.engine.dispose()
