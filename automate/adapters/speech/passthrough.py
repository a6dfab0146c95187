"""Speech-to-text boundary: implements TranscriberPort.

No recognizer is bundled. Clients are expected to send the transcript;
audio bytes are accepted only when they already hold UTF-8 text.
"""


class TranscriptionUnavailable(Exception):
    """Raised when audio cannot be turned into text"""
    pass


class PassthroughTranscriber:
    async def transcribe(self, audio: bytes) -> str:
        try:
            text = audio.decode("utf-8").strip()
        except UnicodeDecodeError:
            raise TranscriptionUnavailable("speech recognition is not configured")
        if not text or "\x00" in text:
            raise TranscriptionUnavailable("speech recognition is not configured")
        return text
