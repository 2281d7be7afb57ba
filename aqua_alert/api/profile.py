from fastapi import APIRouter, Depends

from ..core.context import AppContext, get_context
from ..domain import seed
from ..domain.models import ProfileResponse

router = APIRouter()


@router.get("/", response_model=ProfileResponse)
def get_profile(context: AppContext = Depends(get_context)):
    """
    Profile page.

    Name and email come from the resident user, or the placeholder profile
    when nobody is signed in; everything else is the static profile data
    shown to every account.
    """
    profile = dict(seed.PROFILE_DEFAULTS)
    user = context.auth.user
    if user is not None:
        profile.update(name=user.name, email=user.email)
    return ProfileResponse(**profile)
