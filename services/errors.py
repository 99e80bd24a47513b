"""
Error taxonomy for the mix pipeline and the card service endpoints
"""
from typing import Optional


class MixPipelineError(Exception):
    """Base error carrying the caller-facing message and HTTP status."""

    status_code = 500

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.message = message
        self.session_id: Optional[str] = None
        if status_code is not None:
            self.status_code = status_code


class ValidationError(MixPipelineError):
    status_code = 400


class SynthesisError(MixPipelineError):
    pass


class FetchError(MixPipelineError):
    pass


class MixError(MixPipelineError):
    """Audio engine failure; diagnostics holds the engine's stderr."""

    def __init__(self, message: str, diagnostics: str = ""):
        super().__init__(message)
        self.diagnostics = diagnostics


class PublishError(MixPipelineError):
    pass


class CleanupError(MixPipelineError):
    """Internal only. Logged by the janitor, never sent to the caller."""


class LyricsError(MixPipelineError):
    pass


class CardStoreError(MixPipelineError):
    pass


class CardNotFoundError(CardStoreError):
    status_code = 404


class ProxyError(MixPipelineError):
    pass
