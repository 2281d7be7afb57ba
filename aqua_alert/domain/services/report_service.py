"""
Hazard report form service.

Covers everything behind the "Report a Hazard" form:
- field-level validation with the messages shown next to each input
- a simulated submission that resolves (or fails) after a bounded delay
- the geolocation boundary used to pre-fill the location field
- local image previews for attachments (nothing is uploaded)
- simulated voice transcription that can be polled or cancelled

There is no transport anywhere in this module. A successful submission
returns a receipt; it does not add the report to the hazard map.
"""
import asyncio
import io
import logging
import random
from collections import deque
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Callable, Deque, Dict, List, Optional, Tuple
from uuid import uuid4

from PIL import Image, UnidentifiedImageError

from ..models import (
    AttachmentPreview,
    GeolocationResult,
    HazardReportForm,
    LocationPrefill,
    ReportReceipt,
    TranscriptionStatus,
)

logger = logging.getLogger(__name__)

# The form offers infrastructure damage even though map reports never carry it.
FORM_HAZARD_TYPES = ("contamination", "flooding", "chemical", "temperature", "infrastructure", "other")
FORM_SEVERITIES = ("low", "medium", "high", "critical")

REQUIRED_FIELD_MESSAGES = {
    "type": "Please select a hazard type",
    "severity": "Please select a severity level",
    "title": "Please provide a brief title",
    "description": "Please provide a detailed description",
    "location": "Please provide the location",
}

GEOLOCATION_ERROR_MESSAGES = {
    "permission_denied": "Location permission was denied.",
    "position_unavailable": "Your position is currently unavailable.",
    "timeout": "Timed out while finding your location.",
}

VOICE_TRANSCRIPT = (
    "Voice recording: Emergency water contamination detected near the main reservoir. "
    "Strong chemical smell and unusual water color observed."
)

# Finished recordings kept for polling before the oldest are forgotten.
MAX_FINISHED_TRANSCRIPTIONS = 100


class ReportValidationError(Exception):
    """One or more form fields are missing or invalid."""

    def __init__(self, errors: Dict[str, str]):
        super().__init__("; ".join(f"{field}: {message}" for field, message in errors.items()))
        self.errors = errors


class SubmissionError(Exception):
    """The simulated submission failed. The user may retry."""
    pass


class GeolocationError(Exception):
    """The host platform could not supply a position."""

    def __init__(self, reason: str):
        super().__init__(GEOLOCATION_ERROR_MESSAGES.get(reason, reason))
        self.reason = reason


class AttachmentError(Exception):
    pass


def validate_report(form: HazardReportForm) -> Dict[str, str]:
    """Return field -> message for every problem; empty when the form is valid."""
    errors = {}
    for field, message in REQUIRED_FIELD_MESSAGES.items():
        value = getattr(form, field)
        if value is None or not str(value).strip():
            errors[field] = message

    if "type" not in errors and form.type not in FORM_HAZARD_TYPES:
        errors["type"] = f"Unknown hazard type '{form.type}'"
    if "severity" not in errors and form.severity not in FORM_SEVERITIES:
        errors["severity"] = f"Unknown severity level '{form.severity}'"
    if (form.latitude is None) != (form.longitude is None):
        errors["location"] = "Coordinates need both latitude and longitude"
    return errors


def resolve_location(result: GeolocationResult) -> LocationPrefill:
    """Turn a geolocation answer into the location pre-fill, or raise GeolocationError."""
    if result.error is not None:
        raise GeolocationError(result.error)
    if result.latitude is None or result.longitude is None:
        raise GeolocationError("position_unavailable")
    return LocationPrefill(
        latitude=result.latitude,
        longitude=result.longitude,
        location=f"{result.latitude:.6f}, {result.longitude:.6f}",
    )


def preview_attachments(
    files: List[Tuple[str, Optional[str], bytes]],
    max_files: int,
    max_bytes: int,
) -> List[AttachmentPreview]:
    """
    Build previews for locally selected images.

    Args:
        files: (filename, content_type, content) per selected file
        max_files: Maximum number of files accepted at once
        max_bytes: Maximum size of a single file

    Raises:
        AttachmentError: too many files, a file too large, an unreadable
            image, or one whose header declares a decompression-bomb size
    """
    if len(files) > max_files:
        raise AttachmentError(f"At most {max_files} images can be attached")

    previews = []
    for filename, content_type, content in files:
        if len(content) > max_bytes:
            raise AttachmentError(f"{filename} is larger than {max_bytes} bytes")
        try:
            with Image.open(io.BytesIO(content)) as img:
                width, height = img.size
                image_format = img.format
        except Image.DecompressionBombError as e:
            raise AttachmentError(f"{filename} has too many pixels to preview") from e
        except (UnidentifiedImageError, OSError) as e:
            raise AttachmentError(f"{filename} is not a supported image") from e

        previews.append(AttachmentPreview(
            filename=filename,
            content_type=content_type,
            size_bytes=len(content),
            format=image_format,
            width=width,
            height=height,
        ))
    return previews


@dataclass
class Transcription:
    task: asyncio.Task
    state: str = "recording"
    transcript: Optional[str] = None


class ReportService:
    def __init__(
        self,
        submission_delay: float,
        transcription_delay: float,
        failure_rate: float = 0.0,
        rng: Optional[random.Random] = None,
        max_finished: int = MAX_FINISHED_TRANSCRIPTIONS,
    ):
        self.submission_delay = submission_delay
        self.transcription_delay = transcription_delay
        self.failure_rate = failure_rate
        self.rng = rng or random.Random()
        self.max_finished = max_finished
        self._transcriptions: Dict[str, Transcription] = {}
        self._finished: Deque[str] = deque()

    async def submit(self, form: HazardReportForm) -> ReportReceipt:
        """
        Validate and "submit" a report after the simulated network delay.

        Cancelling the awaiting task abandons the submission.

        Raises:
            ReportValidationError: required fields missing or invalid
            SubmissionError: simulated transport failure
        """
        errors = validate_report(form)
        if errors:
            raise ReportValidationError(errors)

        await asyncio.sleep(self.submission_delay)

        if self.rng.random() < self.failure_rate:
            logger.warning(f"Simulated submission failure for report '{form.title}'")
            raise SubmissionError("There was an error submitting your report. Please try again.")

        receipt = ReportReceipt(
            report_id=uuid4().hex,
            submitted_at=datetime.now(timezone.utc),
            anonymous=form.anonymous,
            message="Your report has been submitted successfully. Emergency services have been notified.",
        )
        logger.info(f"Hazard report {receipt.report_id} submitted ({form.type}/{form.severity})")
        return receipt

    # -------------------------------------------------------------------------
    # Voice transcription
    # -------------------------------------------------------------------------

    def start_transcription(self, on_complete: Optional[Callable[[str], None]] = None) -> str:
        """
        Begin a recording; must be called from a running event loop.

        on_complete receives the transcript once the simulated delay elapses.
        It is not called for a cancelled recording.
        """
        transcription_id = uuid4().hex
        task = asyncio.get_running_loop().create_task(self._transcribe(transcription_id, on_complete))
        self._transcriptions[transcription_id] = Transcription(task=task)
        logger.info(f"Voice recording {transcription_id} started")
        return transcription_id

    async def _transcribe(self, transcription_id: str, on_complete: Optional[Callable[[str], None]]):
        await asyncio.sleep(self.transcription_delay)
        if transcription_id in self._transcriptions:
            self._finish(transcription_id, "completed", VOICE_TRANSCRIPT)
            logger.info(f"Voice recording {transcription_id} transcribed")
            if on_complete is not None:
                on_complete(VOICE_TRANSCRIPT)

    def _finish(self, transcription_id: str, state: str, transcript: Optional[str] = None) -> None:
        entry = self._transcriptions[transcription_id]
        entry.state = state
        entry.transcript = transcript
        self._finished.append(transcription_id)
        while len(self._finished) > self.max_finished:
            self._transcriptions.pop(self._finished.popleft(), None)

    def transcription_status(self, transcription_id: str) -> Optional[TranscriptionStatus]:
        """
        Current state of a recording, or None if unknown.

        A finished (completed or cancelled) recording is reported once and
        then forgotten. Unread finished recordings beyond max_finished are
        dropped oldest first.
        """
        entry = self._transcriptions.get(transcription_id)
        if entry is None:
            return None
        status = TranscriptionStatus(id=transcription_id, state=entry.state, transcript=entry.transcript)
        if entry.state != "recording":
            del self._transcriptions[transcription_id]
            self._finished.remove(transcription_id)
        return status

    def cancel_transcription(self, transcription_id: str) -> bool:
        entry = self._transcriptions.get(transcription_id)
        if entry is None:
            return False
        if not entry.task.done():
            entry.task.cancel()
            self._finish(transcription_id, "cancelled")
            logger.info(f"Voice recording {transcription_id} stopped")
        return True

    def cancel_all(self) -> None:
        for entry in self._transcriptions.values():
            if not entry.task.done():
                entry.task.cancel()
        self._transcriptions.clear()
        self._finished.clear()
