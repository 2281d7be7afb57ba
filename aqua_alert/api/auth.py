"""
Authentication API endpoints for Aqua Alert.

Placeholder identity only: login and register store a name/email pair in
local storage, logout removes it. No password or token is checked.
"""
import logging

from fastapi import APIRouter, Depends

from ..core.context import AppContext, get_context
from ..domain.models import AuthState, Credentials

router = APIRouter()
logger = logging.getLogger(__name__)


def _state(context: AppContext) -> AuthState:
    return AuthState(authenticated=context.auth.is_authenticated, user=context.auth.user)


@router.get("/me", response_model=AuthState)
def get_auth_state(context: AppContext = Depends(get_context)):
    """Current auth state: Anonymous or the resident user."""
    return _state(context)


@router.post("/login", response_model=AuthState)
def login(credentials: Credentials, context: AppContext = Depends(get_context)):
    """Sign in, replacing any user already signed in."""
    user = context.auth.login(credentials.name, credentials.email)
    context.notifications.success("Signed In", f"Welcome back, {user.name}!")
    return _state(context)


@router.post("/register", response_model=AuthState)
def register(credentials: Credentials, context: AppContext = Depends(get_context)):
    """Create an account. Behaves exactly like login."""
    user = context.auth.register(credentials.name, credentials.email)
    context.notifications.success("Account Created", f"Welcome to Aqua Alert, {user.name}!")
    return _state(context)


@router.post("/logout", response_model=AuthState)
def logout(context: AppContext = Depends(get_context)):
    was_signed_in = context.auth.is_authenticated
    context.auth.logout()
    if was_signed_in:
        context.notifications.info("Signed Out", "You have been signed out.")
    return _state(context)
