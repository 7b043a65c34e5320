"""Session-protected proxy for Deepgram speech-to-text transcription."""

__version__ = "0.1.0"
