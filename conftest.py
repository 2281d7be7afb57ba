import io
import struct
import zlib
import pytest
from datetime import datetime, timedelta, timezone
from fastapi.testclient import TestClient
from PIL import Image

from aqua_alert.core.config import settings
from aqua_alert.main import app
from aqua_alert.infrastructure.local_storage import LocalStorage


@pytest.fixture
def test_settings(monkeypatch, tmp_path):
    """
    Point the app at a throwaway storage file and remove simulated delays.

    The storage file lives for the whole test, so several TestClient
    sessions in one test behave like restarts of the same installation.
    """
    monkeypatch.setattr(settings, "STORAGE_URL", f"sqlite:///{tmp_path / 'storage.db'}")
    monkeypatch.setattr(settings, "REPORT_SUBMISSION_DELAY_SECONDS", 0.0)
    monkeypatch.setattr(settings, "TRANSCRIPTION_DELAY_SECONDS", 0.0)
    monkeypatch.setattr(settings, "SUBMISSION_FAILURE_RATE", 0.0)
    monkeypatch.setattr(settings, "NOTIFICATION_TIMEOUT_SECONDS", 5.0)
    return settings


@pytest.fixture
def client(test_settings):
    """Test client with the app lifespan running (context created and torn down)."""
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def context(client):
    """The application context behind `client`."""
    return client.app.state.context


@pytest.fixture
def storage():
    """In-memory local storage."""
    store = LocalStorage("sqlite://")
    yield store
    store.close()


class FakeClock:
    """Manually advanced clock for time-dependent services."""

    def __init__(self, start=None):
        self.now = start or datetime(2024, 1, 15, 12, 0, tzinfo=timezone.utc)

    def __call__(self):
        return self.now

    def advance(self, **kwargs):
        self.now += timedelta(**kwargs)


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def png_bytes():
    """A small valid PNG image."""
    buffer = io.BytesIO()
    Image.new("RGB", (64, 48), color=(0, 120, 200)).save(buffer, format="PNG")
    return buffer.getvalue()


@pytest.fixture
def valid_report():
    """Sample hazard report form with every required field."""
    return {
        "type": "contamination",
        "severity": "high",
        "title": "Discolored tap water",
        "description": "Brown water with a chemical smell from taps on Main St.",
        "location": "40.712800, -74.006000",
        "latitude": 40.7128,
        "longitude": -74.006,
        "contact_info": "",
        "anonymous": False,
    }


def _png_chunk(kind, data):
    body = kind + data
    return struct.pack(">I", len(data)) + body + struct.pack(">I", zlib.crc32(body) & 0xFFFFFFFF)


@pytest.fixture
def oversized_png_bytes():
    """A tiny PNG whose header declares 30000x30000 pixels."""
    header = struct.pack(">IIBBBBB", 30000, 30000, 8, 2, 0, 0, 0)
    return (
        b"\x89PNG\r\n\x1a\n"
        + _png_chunk(b"IHDR", header)
        + _png_chunk(b"IDAT", zlib.compress(b""))
        + _png_chunk(b"IEND", b"")
    )
