import json

import httpx
import pytest
from httpx import ASGITransport, AsyncClient

from transcription_proxy.config import Settings, get_settings
from transcription_proxy.core.auth import issue_token
from transcription_proxy.core.deepgram import DeepgramClient, get_deepgram_client

DEEPGRAM_SUCCESS = {
    "metadata": {
        "request_id": "req-123",
        "model_uuid": "uuid-456",
        "duration": 2.5,
    },
    "results": {
        "channels": [
            {
                "alternatives": [
                    {
                        "transcript": "hello world",
                        "words": [
                            {"word": "hello", "start": 0.1, "end": 0.4, "confidence": 0.99},
                            {"word": "world", "start": 0.5, "end": 0.9, "confidence": 0.98},
                        ],
                    }
                ]
            }
        ]
    },
}


class FakeDeepgram:
    """Records requests sent to the Deepgram API and replays a canned response."""

    def __init__(self):
        self.requests = []
        self.status_code = 200
        self.payload = DEEPGRAM_SUCCESS
        self.error = None

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.error is not None:
            raise self.error
        if isinstance(self.payload, (dict, list)):
            return httpx.Response(self.status_code, json=self.payload)
        return httpx.Response(self.status_code, content=self.payload)

    def last_json(self) -> dict:
        return json.loads(self.requests[-1].content)


@pytest.fixture
def settings(tmp_path):
    """Test configuration."""
    metadata_file = tmp_path / "deepgram.toml"
    metadata_file.write_text('[meta]\ntitle = "Test Starter"\nlanguage = "Python"\n')
    return Settings(
        _env_file=None,
        deepgram_api_key="test-key",
        default_model="nova-3",
        deepgram_base_url="https://deepgram.test",
        session_secret="test-secret",
        metadata_path=str(metadata_file),
        max_upload_size=1024,
    )


@pytest.fixture
def fake_deepgram():
    return FakeDeepgram()


@pytest.fixture
async def deepgram_client(settings, fake_deepgram):
    """DeepgramClient wired to the fake Deepgram API."""
    async with httpx.AsyncClient(transport=httpx.MockTransport(fake_deepgram.handler)) as http_client:
        yield DeepgramClient(
            http_client,
            api_key=settings.deepgram_api_key,
            base_url=settings.deepgram_base_url,
        )


@pytest.fixture
async def client(settings, deepgram_client):
    """Async HTTP client for testing the API."""
    from transcription_proxy.main import app

    app.dependency_overrides[get_settings] = lambda: settings
    app.dependency_overrides[get_deepgram_client] = lambda: deepgram_client

    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test"
    ) as client:
        yield client

    app.dependency_overrides.clear()


@pytest.fixture
def auth_headers(settings):
    """Authorization header carrying a valid session token."""
    token = issue_token(settings.session_secret, settings.jwt_expiry_seconds)
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def audio_bytes():
    """Sample audio data."""
    return b"RIFF" + b"\x00\x01" * 100


@pytest.fixture
def deepgram_success():
    """A successful Deepgram pre-recorded response."""
    return DEEPGRAM_SUCCESS
