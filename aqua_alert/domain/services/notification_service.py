"""
Notification dispatcher for transient UI messages (toasts).

Holds an insertion-ordered list of active notifications shared by every
view of the application context. Each added notification is removed
automatically after a fixed timeout:

- when the dispatcher is bound to an event loop, removal is scheduled on it
  with loop.call_later (callers on worker threads hop onto the loop first);
- independently, reads drop anything whose expires_at has passed, so an
  unbound dispatcher (scripts, tests) still expires entries.

No priority, no deduplication, nothing persisted.
"""
import asyncio
import logging
import threading
from datetime import datetime, timedelta, timezone
from typing import Callable, Dict, List, Optional

from ..models import Notification, NotificationType

logger = logging.getLogger(__name__)


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


class NotificationDispatcher:
    def __init__(
        self,
        timeout_seconds: float,
        loop: Optional[asyncio.AbstractEventLoop] = None,
        clock: Callable[[], datetime] = utc_now,
    ):
        self.timeout_seconds = timeout_seconds
        self.loop = loop
        self.clock = clock
        self._items: List[Notification] = []
        self._handles: Dict[str, asyncio.TimerHandle] = {}
        self._lock = threading.Lock()

    def add(self, notification: Notification) -> Notification:
        """Append a notification and schedule its removal."""
        created_at = self.clock()
        notification = notification.model_copy(update={
            "created_at": created_at,
            "expires_at": created_at + timedelta(seconds=self.timeout_seconds),
        })
        with self._lock:
            self._items.append(notification)
        self._schedule_removal(notification.id)
        logger.debug(f"Notification added: [{notification.type}] {notification.title}")
        return notification

    def notify(self, type: NotificationType, title: str, message: str = "") -> Notification:
        return self.add(Notification(type=type, title=title, message=message))

    def success(self, title: str, message: str = "") -> Notification:
        return self.notify("success", title, message)

    def error(self, title: str, message: str = "") -> Notification:
        return self.notify("error", title, message)

    def info(self, title: str, message: str = "") -> Notification:
        return self.notify("info", title, message)

    def active(self) -> List[Notification]:
        """Notifications still on display, oldest first."""
        now = self.clock()
        with self._lock:
            expired = [n.id for n in self._items if n.expires_at is not None and n.expires_at <= now]
            if expired:
                self._items = [n for n in self._items if n.id not in expired]
            items = list(self._items)
        for notification_id in expired:
            self._cancel_handle(notification_id)
        return items

    def dismiss(self, notification_id: str) -> bool:
        with self._lock:
            before = len(self._items)
            self._items = [n for n in self._items if n.id != notification_id]
            removed = len(self._items) != before
        self._cancel_handle(notification_id)
        return removed

    def clear(self) -> None:
        with self._lock:
            self._items.clear()
            handles = list(self._handles.values())
            self._handles.clear()
        for handle in handles:
            handle.cancel()

    # -------------------------------------------------------------------------
    # Scheduling
    # -------------------------------------------------------------------------

    def _schedule_removal(self, notification_id: str) -> None:
        loop = self.loop
        if loop is None or loop.is_closed():
            return
        try:
            running = asyncio.get_running_loop()
        except RuntimeError:
            running = None

        if running is loop:
            self._arm(notification_id)
        else:
            loop.call_soon_threadsafe(self._arm, notification_id)

    def _arm(self, notification_id: str) -> None:
        handle = self.loop.call_later(self.timeout_seconds, self._expire, notification_id)
        with self._lock:
            if any(n.id == notification_id for n in self._items):
                self._handles[notification_id] = handle
                return
        # Dismissed before the timer was armed
        handle.cancel()

    def _expire(self, notification_id: str) -> None:
        with self._lock:
            self._handles.pop(notification_id, None)
            self._items = [n for n in self._items if n.id != notification_id]
        logger.debug(f"Notification {notification_id} expired")

    def _cancel_handle(self, notification_id: str) -> None:
        with self._lock:
            handle = self._handles.pop(notification_id, None)
        if handle is not None:
            handle.cancel()
