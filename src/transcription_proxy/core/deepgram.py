"""Deepgram pre-recorded transcription client.

Wraps a shared httpx.AsyncClient. Each call makes exactly one request to
/v1/listen; failures are raised as UpstreamError and never retried.
"""

import logging
from typing import Dict, Optional

import httpx
from fastapi import Request

from transcription_proxy.core.errors import UpstreamError
from transcription_proxy.core.inputs import AudioSource, QueryValue

logger = logging.getLogger(__name__)

LISTEN_PATH = "/v1/listen"


class DeepgramClient:
    """Thin async client for Deepgram's speech-to-text API."""

    def __init__(
        self,
        http_client: httpx.AsyncClient,
        api_key: str,
        base_url: str = "https://api.deepgram.com",
        timeout_seconds: float = 60.0,
    ):
        self.http_client = http_client
        self.api_key = api_key
        self.base_url = base_url.rstrip("/")
        self.timeout_seconds = timeout_seconds

    async def transcribe(
        self,
        source: AudioSource,
        model: str,
        options: Optional[Dict[str, QueryValue]] = None,
    ) -> dict:
        """
        Transcribe audio with Deepgram.

        Args:
            source: URL or uploaded bytes to transcribe
            model: Deepgram model name (e.g. "nova-3")
            options: Extra query parameters, lists sent as repeated keys;
                model always overrides a 'model' key here

        Returns:
            Decoded Deepgram JSON response

        Raises:
            UpstreamError: On transport failure, non-2xx status or a non-JSON body
        """
        params = dict(options or {})
        params["model"] = model

        headers = {"Authorization": f"Token {self.api_key}"}

        request_kwargs = {
            "params": params,
            "headers": headers,
            "timeout": self.timeout_seconds,
        }
        if source.is_url:
            request_kwargs["json"] = {"url": source.url}
        else:
            headers["Content-Type"] = source.mimetype
            request_kwargs["content"] = source.content

        logger.debug(f"Sending {source.kind} transcription request (model={model})")

        try:
            response = await self.http_client.post(
                f"{self.base_url}{LISTEN_PATH}", **request_kwargs
            )
        except httpx.TimeoutException as e:
            raise UpstreamError(f"Failed to connect to Deepgram API: request timed out ({e})")
        except httpx.HTTPError as e:
            raise UpstreamError(f"Failed to connect to Deepgram API: {e}")

        try:
            data = response.json()
        except ValueError:
            data = None

        if not response.is_success:
            raise UpstreamError(
                _error_message(data),
                upstream_status=response.status_code,
            )

        if not isinstance(data, dict):
            raise UpstreamError(
                "Invalid response from Deepgram API",
                upstream_status=response.status_code,
            )

        return data


def _error_message(data: Optional[dict]) -> str:
    """Extract the provider's error message from an error response body."""
    if isinstance(data, dict):
        message = data.get("err_msg") or data.get("message")
        if message:
            return str(message)
    return "Deepgram API error"


def get_deepgram_client(request: Request) -> DeepgramClient:
    """FastAPI dependency returning the client opened by the app lifespan."""
    client = getattr(request.app.state, "deepgram", None)
    if client is None:
        raise RuntimeError("Deepgram client not initialized")
    return client
