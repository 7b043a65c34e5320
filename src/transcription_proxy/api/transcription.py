"""Transcription proxy endpoint."""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, File, Form, UploadFile

from transcription_proxy.config import Settings, get_settings
from transcription_proxy.core.auth import require_session
from transcription_proxy.core.deepgram import DeepgramClient, get_deepgram_client
from transcription_proxy.core.errors import UpstreamError
from transcription_proxy.core.formatter import format_transcription_response
from transcription_proxy.core.inputs import (
    check_upload_size,
    parse_features,
    validate_transcription_input,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["transcription"])


@router.post("/transcription", dependencies=[Depends(require_session)])
async def transcribe(
    file: Optional[UploadFile] = File(None),
    url: Optional[str] = Form(None),
    model: Optional[str] = Form(None),
    features: Optional[str] = Form(None),
    settings: Settings = Depends(get_settings),
    deepgram: DeepgramClient = Depends(get_deepgram_client),
):
    """
    Transcribe an uploaded file or a remote URL with Deepgram.

    Form fields:
        file: Audio upload (multipart)
        url: URL of an audio file; wins over file when both are sent
        model: Deepgram model (defaults to settings.default_model)
        features: JSON object of extra Deepgram query options

    Returns transcript, words, metadata and, when known, duration.
    """
    content = None
    content_type = None
    if file is not None and not (url and url.strip()):
        # file.size is None when the client did not report it
        check_upload_size(file.size, settings.max_upload_size)
        content = await file.read(settings.max_upload_size + 1)
        content_type = file.content_type

    source = validate_transcription_input(
        url,
        content,
        content_type,
        max_upload_size=settings.max_upload_size,
    )
    options = parse_features(features)
    model_name = model or settings.default_model

    try:
        raw = await deepgram.transcribe(source, model_name, options)
    except UpstreamError as e:
        logger.error(f"Transcription error (upstream status {e.upstream_status}): {e.message}")
        raise

    return format_transcription_response(raw, model_name)
