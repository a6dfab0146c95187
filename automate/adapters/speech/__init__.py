"""Speech adapters."""

from automate.adapters.speech.passthrough import PassthroughTranscriber, TranscriptionUnavailable

__all__ = [
    "PassthroughTranscriber",
    "TranscriptionUnavailable",
]
