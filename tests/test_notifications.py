"""
Tests for the notification dispatcher and notifications API.
"""
import asyncio
import pytest

from aqua_alert.domain.models import Notification
from aqua_alert.domain.services.notification_service import NotificationDispatcher


@pytest.fixture
def dispatcher(clock):
    return NotificationDispatcher(timeout_seconds=5.0, clock=clock)


class TestNotificationDispatcher:
    def test_add_assigns_expiry(self, dispatcher, clock):
        notification = dispatcher.success("Saved", "All good")
        assert notification.created_at == clock.now
        assert (notification.expires_at - notification.created_at).total_seconds() == 5.0

    def test_active_preserves_insertion_order(self, dispatcher):
        dispatcher.info("First")
        dispatcher.error("Second")
        dispatcher.success("Third")
        assert [n.title for n in dispatcher.active()] == ["First", "Second", "Third"]

    def test_each_notification_gets_unique_id(self, dispatcher):
        a = dispatcher.info("Same")
        b = dispatcher.info("Same")
        assert a.id != b.id
        assert len(dispatcher.active()) == 2

    def test_expires_after_timeout(self, dispatcher, clock):
        dispatcher.info("Short lived")
        clock.advance(seconds=4.9)
        assert len(dispatcher.active()) == 1
        clock.advance(seconds=0.1)
        assert dispatcher.active() == []

    def test_expiry_is_per_notification(self, dispatcher, clock):
        dispatcher.info("Old")
        clock.advance(seconds=3)
        dispatcher.info("New")
        clock.advance(seconds=2)
        assert [n.title for n in dispatcher.active()] == ["New"]

    def test_add_keeps_caller_fields(self, dispatcher):
        added = dispatcher.add(Notification(type="error", title="Broken", message="Try again"))
        assert added.type == "error"
        assert added.message == "Try again"

    def test_dismiss(self, dispatcher):
        keep = dispatcher.info("Keep")
        drop = dispatcher.info("Drop")
        assert dispatcher.dismiss(drop.id) is True
        assert [n.id for n in dispatcher.active()] == [keep.id]

    def test_dismiss_unknown(self, dispatcher):
        assert dispatcher.dismiss("missing") is False

    def test_clear(self, dispatcher):
        dispatcher.info("One")
        dispatcher.info("Two")
        dispatcher.clear()
        assert dispatcher.active() == []


class TestLoopScheduledExpiry:
    def test_removed_by_event_loop_timer(self):
        async def scenario():
            dispatcher = NotificationDispatcher(timeout_seconds=0.01, loop=asyncio.get_running_loop())
            dispatcher.info("Blink")
            assert len(dispatcher._items) == 1
            await asyncio.sleep(0.05)
            return dispatcher

        dispatcher = asyncio.run(scenario())
        assert dispatcher._items == []
        assert dispatcher._handles == {}

    def test_dismiss_cancels_timer(self):
        async def scenario():
            dispatcher = NotificationDispatcher(timeout_seconds=10, loop=asyncio.get_running_loop())
            notification = dispatcher.info("Dismiss me")
            assert notification.id in dispatcher._handles
            dispatcher.dismiss(notification.id)
            return dispatcher

        dispatcher = asyncio.run(scenario())
        assert dispatcher._handles == {}


# =============================================================================
# API
# =============================================================================

class TestNotificationsAPI:
    def test_empty_on_startup(self, client):
        response = client.get("/api/notifications/")
        assert response.status_code == 200
        assert response.json() == []

    def test_add_and_list(self, client):
        response = client.post("/api/notifications/", json={"type": "success", "title": "Saved", "message": "Done"})
        assert response.status_code == 201
        created = response.json()
        assert created["expires_at"] is not None

        listed = client.get("/api/notifications/").json()
        assert [n["id"] for n in listed] == [created["id"]]

    def test_invalid_type_rejected(self, client):
        response = client.post("/api/notifications/", json={"type": "warning", "title": "Nope"})
        assert response.status_code == 422

    def test_dismiss(self, client):
        created = client.post("/api/notifications/", json={"title": "Bye"}).json()
        response = client.delete(f"/api/notifications/{created['id']}")
        assert response.status_code == 200
        assert client.get("/api/notifications/").json() == []

    def test_dismiss_unknown(self, client):
        assert client.delete("/api/notifications/missing").status_code == 404

    def test_clear(self, client):
        client.post("/api/notifications/", json={"title": "One"})
        client.post("/api/notifications/", json={"title": "Two"})
        client.delete("/api/notifications/")
        assert client.get("/api/notifications/").json() == []
