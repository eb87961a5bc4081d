from .gemini import GeminiImageEngine
from .request_builder import build_generate_content_request
from .response_normalizer import normalize_response
from .transport import GeminiTransport

__all__ = ["GeminiImageEngine", "GeminiTransport", "build_generate_content_request", "normalize_response"]
