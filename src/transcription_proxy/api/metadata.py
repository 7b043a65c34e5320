"""Application metadata endpoint."""

from fastapi import APIRouter, Depends

from transcription_proxy.config import Settings, get_settings
from transcription_proxy.core.metadata import load_metadata

router = APIRouter(prefix="/api", tags=["metadata"])


@router.get("/metadata")
async def get_metadata(settings: Settings = Depends(get_settings)):
    """Return the [meta] table of deepgram.toml."""
    return load_metadata(settings.metadata_path)
