"""Request input validation for the transcription endpoint."""

import json
from dataclasses import dataclass
from typing import Dict, List, Optional, Union

from transcription_proxy.core.errors import InputValidationError

DEFAULT_MIMETYPE = "audio/wav"


@dataclass
class AudioSource:
    """Audio to forward upstream: either a remote URL or uploaded bytes."""

    kind: str  # "url" or "file"
    url: Optional[str] = None
    content: bytes = b""
    mimetype: str = DEFAULT_MIMETYPE

    @property
    def is_url(self) -> bool:
        return self.kind == "url"


def check_upload_size(size: Optional[int], max_upload_size: Optional[int]) -> None:
    """Raise FILE_TOO_LARGE when size is known and above the limit."""
    if size is None or max_upload_size is None:
        return
    if size > max_upload_size:
        raise InputValidationError(
            f"File exceeds maximum upload size of {max_upload_size} bytes",
            code="FILE_TOO_LARGE",
        )


def validate_transcription_input(
    url: Optional[str],
    content: Optional[bytes],
    content_type: Optional[str] = None,
    max_upload_size: Optional[int] = None,
) -> AudioSource:
    """
    Pick the audio source for a transcription request.

    A non-blank URL takes precedence over an uploaded file.

    Args:
        url: URL form field, if any
        content: Uploaded file bytes, if any
        content_type: Content type the client declared for the upload
        max_upload_size: Largest accepted upload in bytes (None = unlimited)

    Returns:
        AudioSource describing what to send upstream

    Raises:
        InputValidationError: If neither input is usable or the upload is too large
    """
    if url and url.strip():
        return AudioSource(kind="url", url=url.strip())

    if content:
        check_upload_size(len(content), max_upload_size)
        return AudioSource(
            kind="file",
            content=content,
            mimetype=content_type or DEFAULT_MIMETYPE,
        )

    raise InputValidationError("Either file or url must be provided")


QueryValue = Union[str, List[str]]


def _query_value(key: str, value) -> str:
    """Render one JSON scalar as a Deepgram query value."""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (str, int, float)):
        return str(value)
    raise InputValidationError(
        f"features.{key} must be a string, number, boolean or list of those",
        code="INVALID_FEATURES",
    )


def parse_features(raw: Optional[str]) -> Dict[str, QueryValue]:
    """
    Parse the optional JSON 'features' field into Deepgram query options.

    Booleans are rendered as 'true'/'false' the way the Deepgram API expects.
    Lists become repeated query parameters (keywords, search, replace) and
    null values are dropped.
    """
    if not raw or not raw.strip():
        return {}

    try:
        features = json.loads(raw)
    except json.JSONDecodeError:
        raise InputValidationError("features must be a JSON object", code="INVALID_FEATURES")

    if not isinstance(features, dict):
        raise InputValidationError("features must be a JSON object", code="INVALID_FEATURES")

    options = {}
    for key, value in features.items():
        if value is None:
            continue
        if isinstance(value, list):
            options[key] = [_query_value(key, item) for item in value if item is not None]
        else:
            options[key] = _query_value(key, value)
    return options
