"""
Load tests for the transcription proxy.

Every request that reaches /api/transcription is forwarded to Deepgram, so
point DEEPGRAM_BASE_URL at a stub when load testing without spending credits.

Run with:
    cd loadtests
    locust --host=http://localhost:8081

Or headless:
    locust --host=http://localhost:8081 --headless -u 50 -r 5 -t 60s

Environment variables:
    LOAD_TEST_AUDIO_URL: Remote audio for URL transcriptions
        (default: Deepgram's public sample)
    LOAD_TEST_AUDIO_FILE: Local audio file for upload transcriptions
        (upload tasks are skipped when unset)
"""

import os
from pathlib import Path

from locust import HttpUser, task, between, events

AUDIO_URL = os.environ.get(
    "LOAD_TEST_AUDIO_URL", "https://dpgr.am/spacewalk.wav"
)
AUDIO_FILE = os.environ.get("LOAD_TEST_AUDIO_FILE")

audio_bytes = Path(AUDIO_FILE).read_bytes() if AUDIO_FILE else None


class TranscriptionUser(HttpUser):
    """
    Load test user exercising the full session + transcription flow.

    Behavior:
    - Fetches a session token on start (and again whenever it is rejected)
    - Mostly URL transcriptions, some uploads, occasional health/metadata
    """

    wait_time = between(0.5, 2.0)

    def on_start(self):
        self.token = None
        self._refresh_token()

    def _refresh_token(self):
        response = self.client.get("/api/session")
        if response.status_code == 200:
            self.token = response.json()["token"]

    def _post_transcription(self, name, **kwargs):
        headers = {"Authorization": f"Bearer {self.token}"}
        with self.client.post(
            "/api/transcription",
            headers=headers,
            name=name,
            catch_response=True,
            **kwargs,
        ) as response:
            if response.status_code == 200:
                response.success()
            elif response.status_code == 401:
                response.failure("Session token rejected")
                self._refresh_token()
            else:
                response.failure(f"Status {response.status_code}: {response.text}")

    @task(6)
    def url_transcribe(self):
        """Transcribe remote audio by URL."""
        self._post_transcription("transcription [url]", data={"url": AUDIO_URL})

    @task(3)
    def file_transcribe(self):
        """Transcribe an uploaded file."""
        if audio_bytes is None:
            return
        self._post_transcription(
            "transcription [file]",
            files={"file": (Path(AUDIO_FILE).name, audio_bytes, "audio/wav")},
        )

    @task(1)
    def health_check(self):
        self.client.get("/health")

    @task(1)
    def metadata(self):
        self.client.get("/api/metadata")


class SessionOnlyUser(HttpUser):
    """
    User that only requests session tokens (no upstream traffic).

    Use this to load test token issuance in isolation:
        locust -f locustfile.py SessionOnlyUser --host=http://localhost:8081
    """

    wait_time = between(0.1, 0.5)

    @task
    def issue_session(self):
        self.client.get("/api/session")


@events.test_start.add_listener
def on_test_start(environment, **kwargs):
    print("Load test starting...")
    print(f"Target host: {environment.host}")
    print(f"Audio URL: {AUDIO_URL}")
    if audio_bytes is not None:
        print(f"Upload file: {AUDIO_FILE} ({len(audio_bytes)} bytes)")
    else:
        print("Upload tasks disabled (LOAD_TEST_AUDIO_FILE not set)")


@events.test_stop.add_listener
def on_test_stop(environment, **kwargs):
    print("\nLoad test completed!")
