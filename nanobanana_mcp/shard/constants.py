"""Project constants for the Gemini image adaptation layer.

Limits here mirror what the Gemini image models accept; keep them in one
place so the input contracts, the request builder and the tool descriptions
agree.
"""

from __future__ import annotations

from typing import Final

from .enums import Model, ResponseModality

# ------------------------------ Gemini REST API ------------------------------ #

DEFAULT_BASE_URL: Final[str] = "https://generativelanguage.googleapis.com/v1beta/models"
GENERATE_CONTENT_METHOD: Final[str] = "generateContent"
API_KEY_HEADER: Final[str] = "x-goog-api-key"
API_KEY_URL: Final[str] = "https://aistudio.google.com/apikey"

# The server always asks for both modalities; text-only or image-only output
# is never requested.
RESPONSE_MODALITIES: Final[tuple[str, ...]] = (ResponseModality.TEXT.value, ResponseModality.IMAGE.value)

# ------------------------------ Input contracts ------------------------------ #

DEFAULT_MODEL: Final[Model] = Model.NANO_BANANA_PRO
COMPOSE_MODEL: Final[Model] = Model.NANO_BANANA_PRO

MIN_PROMPT_LENGTH: Final[int] = 1
MAX_PROMPT_LENGTH: Final[int] = 10000

MIN_COMPOSE_IMAGES: Final[int] = 1
MAX_REFERENCE_IMAGES: Final[int] = 14

IMAGE_MIME_PATTERN: Final[str] = r"^image/(png|jpeg|jpg|gif|webp)$"

# ------------------------------- Output shaping ------------------------------ #

DEFAULT_MIME: Final[str] = "image/png"
PROMPT_PREVIEW_LENGTH: Final[int] = 100

# Error codes carried by ImageGenerationError subclasses
ERROR_CODE_CONFIGURATION: Final[str] = "configuration_error"
ERROR_CODE_VALIDATION: Final[str] = "validation_error"
ERROR_CODE_PROVIDER_ERROR: Final[str] = "provider_error"
ERROR_CODE_NO_CANDIDATES: Final[str] = "no_candidates"
