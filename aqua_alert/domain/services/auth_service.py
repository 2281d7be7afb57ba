"""
Auth state holder for Aqua Alert.

Two states: Anonymous (user is None) and Authenticated(user). login and
register behave identically: both overwrite any resident user and persist
it under a single local-storage key. logout removes the key.

This is a placeholder identity model. Nothing here verifies who the caller
is, and it must not be used as a security boundary.
"""
import json
import logging
from typing import Optional

from pydantic import ValidationError

from ..models import User
from ...infrastructure.local_storage import LocalStorage

logger = logging.getLogger(__name__)


class AuthStateHolder:
    def __init__(self, storage: LocalStorage, storage_key: str):
        self.storage = storage
        self.storage_key = storage_key
        self._user: Optional[User] = self._load()

    def _load(self) -> Optional[User]:
        """Initial state: the stored user if present and readable, else Anonymous."""
        raw = self.storage.get_item(self.storage_key)
        if raw is None:
            return None
        try:
            return User(**json.loads(raw))
        except (json.JSONDecodeError, TypeError, ValidationError) as e:
            logger.warning(f"Ignoring unreadable stored user under '{self.storage_key}': {e}")
            return None

    @property
    def user(self) -> Optional[User]:
        return self._user

    @property
    def is_authenticated(self) -> bool:
        return self._user is not None

    def _authenticate(self, name: str, email: str) -> User:
        user = User(name=name, email=email)
        self.storage.set_item(self.storage_key, user.model_dump_json())
        self._user = user
        return user

    def login(self, name: str, email: str) -> User:
        user = self._authenticate(name, email)
        logger.info(f"User signed in: {email}")
        return user

    def register(self, name: str, email: str) -> User:
        user = self._authenticate(name, email)
        logger.info(f"User registered: {email}")
        return user

    def logout(self) -> None:
        if self._user is not None:
            logger.info(f"User signed out: {self._user.email}")
        self.storage.remove_item(self.storage_key)
        self._user = None
