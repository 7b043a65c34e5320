"""Reshape Deepgram responses into the service's response contract."""

import logging

logger = logging.getLogger(__name__)


def _first_alternative(raw: dict) -> dict:
    """Return results.channels[0].alternatives[0], or {} when absent."""
    try:
        alternative = raw["results"]["channels"][0]["alternatives"][0]
    except (KeyError, IndexError, TypeError):
        return {}
    return alternative if isinstance(alternative, dict) else {}


def format_transcription_response(raw: dict, model_name: str) -> dict:
    """
    Format a Deepgram response.

    Transcript and words are always present, defaulting to empty values
    when Deepgram omits them. Duration is only included when reported.

    Args:
        raw: Decoded Deepgram JSON response
        model_name: Model the request was made with

    Returns:
        Dict with transcript, words, metadata and optionally duration
    """
    alternative = _first_alternative(raw)
    if not alternative:
        logger.warning("Deepgram response contained no transcription alternatives")

    metadata = raw.get("metadata")
    if not isinstance(metadata, dict):
        metadata = {}

    response = {
        "transcript": alternative.get("transcript") or "",
        "words": alternative.get("words") or [],
        "metadata": {
            "model_uuid": metadata.get("model_uuid"),
            "request_id": metadata.get("request_id"),
            "model_name": model_name,
        },
    }

    if metadata.get("duration") is not None:
        response["duration"] = metadata["duration"]

    return response
