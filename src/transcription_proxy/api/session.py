"""Session token endpoint."""

from fastapi import APIRouter, Depends

from transcription_proxy.config import Settings, get_settings
from transcription_proxy.core.auth import issue_token

router = APIRouter(prefix="/api", tags=["session"])


@router.get("/session")
async def create_session(settings: Settings = Depends(get_settings)):
    """Issue a signed, time-limited session token."""
    token = issue_token(settings.session_secret, settings.jwt_expiry_seconds)
    return {"token": token}
