from __future__ import annotations

from .shard import constants as C


class ImageGenerationError(Exception):
    """Base class for failures of a single tool invocation.

    ``user_message`` is what the caller sees; it keeps the upstream message
    text untranslated whenever one is available.
    """

    code: str = "image_generation_error"

    def __init__(self, message: str, *, code: str | None = None) -> None:
        super().__init__(message)
        if code is not None:
            self.code = code

    @property
    def user_message(self) -> str:
        return str(self)


class ConfigurationError(ImageGenerationError):
    """Raised when a required setting (the API key) is missing."""

    code = C.ERROR_CODE_CONFIGURATION


class InputValidationError(ImageGenerationError, ValueError):
    """Raised when tool parameters violate an input contract."""

    code = C.ERROR_CODE_VALIDATION

    def __init__(self, message: str, *, field: str | None = None) -> None:
        super().__init__(message)
        self.field = field


class ProviderError(ImageGenerationError):
    """Raised for non-2xx responses and network failures talking to Gemini."""

    code = C.ERROR_CODE_PROVIDER_ERROR

    def __init__(self, message: str, *, status_code: int | None = None, code: str | None = None) -> None:
        super().__init__(message, code=code)
        self.status_code = status_code


class NoCandidatesError(ProviderError):
    """Raised when a successful response carries no candidates."""

    code = C.ERROR_CODE_NO_CANDIDATES

    def __init__(self, message: str = "No response candidates returned from API") -> None:
        super().__init__(message)


__all__ = [
    "ImageGenerationError",
    "ConfigurationError",
    "InputValidationError",
    "ProviderError",
    "NoCandidatesError",
]
