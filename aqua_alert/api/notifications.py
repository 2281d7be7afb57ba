from fastapi import APIRouter, Depends, HTTPException
from typing import List
import logging

from ..core.context import AppContext, get_context
from ..domain.models import Notification, NotificationCreate

router = APIRouter()
logger = logging.getLogger(__name__)


@router.get("/", response_model=List[Notification])
def list_notifications(context: AppContext = Depends(get_context)):
    """Notifications currently on display, oldest first."""
    return context.notifications.active()


@router.post("/", response_model=Notification, status_code=201)
def add_notification(notification: NotificationCreate, context: AppContext = Depends(get_context)):
    """Queue a notification. It disappears on its own after the display timeout."""
    return context.notifications.notify(notification.type, notification.title, notification.message)


@router.delete("/{notification_id}")
def dismiss_notification(notification_id: str, context: AppContext = Depends(get_context)):
    if not context.notifications.dismiss(notification_id):
        raise HTTPException(status_code=404, detail="Notification not found")
    return {"message": "Notification dismissed"}


@router.delete("/")
def clear_notifications(context: AppContext = Depends(get_context)):
    context.notifications.clear()
    return {"message": "Notifications cleared"}
