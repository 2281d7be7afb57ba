from fastapi import APIRouter, UploadFile, File, HTTPException, Depends
from typing import List
import logging

from ..core.context import AppContext, get_context
from ..domain.models import (
    AttachmentPreview,
    FieldErrors,
    GeolocationResult,
    HazardReportForm,
    LocationPrefill,
    ReportReceipt,
    TranscriptionStatus,
)
from ..domain.services.report_service import (
    AttachmentError,
    GeolocationError,
    ReportValidationError,
    SubmissionError,
    preview_attachments,
    resolve_location,
    validate_report,
)

router = APIRouter()
logger = logging.getLogger(__name__)


@router.post("/validate", response_model=FieldErrors)
def validate_form(form: HazardReportForm):
    """Field-level messages for the form as it stands. Empty errors means ready to submit."""
    return FieldErrors(errors=validate_report(form))


@router.post("/", response_model=ReportReceipt, status_code=201)
async def submit_report(form: HazardReportForm, context: AppContext = Depends(get_context)):
    """
    Submit a hazard report.

    Resolves after REPORT_SUBMISSION_DELAY_SECONDS. Nothing is transmitted and
    the hazard map is unchanged.

    - 422 with {"errors": {field: message}} when required fields are missing
    - 503 on a simulated transport failure; the user may retry
    """
    try:
        receipt = await context.reports.submit(form)
    except ReportValidationError as e:
        raise HTTPException(status_code=422, detail={"errors": e.errors})
    except SubmissionError as e:
        context.notifications.error("Submission Failed", str(e))
        raise HTTPException(status_code=503, detail=str(e))
    except Exception as e:
        logger.error(f"Error submitting report: {e}")
        context.notifications.error("Submission Failed", "There was an error submitting your report. Please try again.")
        raise HTTPException(status_code=500, detail="Failed to submit report")

    context.notifications.success("Hazard Report Submitted", receipt.message)
    return receipt


@router.post("/location", response_model=LocationPrefill)
def use_current_location(result: GeolocationResult, context: AppContext = Depends(get_context)):
    """
    Pre-fill the location field from the device position.

    The client forwards what its geolocation API returned: a position or an
    error code. On error the form stays usable with manual entry.
    """
    try:
        prefill = resolve_location(result)
    except GeolocationError as e:
        logger.info(f"Geolocation unavailable: {e.reason}")
        context.notifications.error("Location Error", "Unable to get your current location. Please enter manually.")
        raise HTTPException(status_code=400, detail=str(e))

    context.notifications.success("Location Found", "Your current location has been set successfully.")
    return prefill


@router.post("/attachments", response_model=List[AttachmentPreview])
async def attach_images(
    files: List[UploadFile] = File(...),
    context: AppContext = Depends(get_context)
):
    """Preview selected images. Files are read for their metadata and discarded."""
    selected = []
    for upload in files:
        selected.append((upload.filename or "image", upload.content_type, await upload.read()))

    try:
        previews = preview_attachments(
            selected,
            max_files=context.settings.MAX_ATTACHMENTS,
            max_bytes=context.settings.MAX_ATTACHMENT_BYTES,
        )
    except AttachmentError as e:
        context.notifications.error("Upload Failed", str(e))
        raise HTTPException(status_code=400, detail=str(e))

    context.notifications.success("Images Uploaded", f"{len(previews)} image(s) added to your report.")
    return previews


@router.post("/transcriptions", response_model=TranscriptionStatus, status_code=201)
async def start_voice_recording(context: AppContext = Depends(get_context)):
    """Start a simulated voice recording; poll it until it completes."""
    def on_complete(transcript: str):
        context.notifications.success(
            "Voice Recording Complete", "Your voice description has been transcribed successfully."
        )

    transcription_id = context.reports.start_transcription(on_complete=on_complete)
    context.notifications.info(
        "Voice Recording Started",
        "Speak clearly to describe the hazard. Tap the microphone again to stop.",
    )
    return context.reports.transcription_status(transcription_id)


@router.get("/transcriptions/{transcription_id}", response_model=TranscriptionStatus)
async def get_voice_recording(transcription_id: str, context: AppContext = Depends(get_context)):
    """Poll a recording. A finished recording is reported once, then forgotten."""
    status = context.reports.transcription_status(transcription_id)
    if status is None:
        raise HTTPException(status_code=404, detail="Recording not found")
    return status


@router.delete("/transcriptions/{transcription_id}", response_model=TranscriptionStatus)
async def stop_voice_recording(transcription_id: str, context: AppContext = Depends(get_context)):
    """Stop a recording before it is transcribed."""
    if not context.reports.cancel_transcription(transcription_id):
        raise HTTPException(status_code=404, detail="Recording not found")
    return context.reports.transcription_status(transcription_id)
