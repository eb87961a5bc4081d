from __future__ import annotations

from loguru import logger

from ..schema import GenerationRequest, NormalizedResult
from ..settings import Settings, get_settings
from .request_builder import build_generate_content_request
from .response_normalizer import normalize_response
from .transport import GeminiTransport


class GeminiImageEngine:
    """Gemini image adapter: build envelope, post once, normalize.

    Generate, edit and compose all go through :meth:`run`; they differ only
    in how many reference images the request carries.
    """

    def __init__(self, transport: GeminiTransport) -> None:
        self.transport = transport

    @classmethod
    def from_settings(cls, settings: Settings | None = None) -> GeminiImageEngine:
        """Create an engine from settings.

        Raises:
            ConfigurationError: If no Gemini API key is configured.
        """
        settings = settings or get_settings()
        transport = GeminiTransport(
            settings.gemini_api_key,
            base_url=settings.gemini_base_url,
            timeout=settings.gemini_timeout,
        )
        return cls(transport)

    async def run(self, req: GenerationRequest) -> NormalizedResult:
        envelope = build_generate_content_request(req)
        logger.info(f"Calling {req.model.value} with {len(req.reference_images)} reference image(s)")

        response = await self.transport.post_generate_content(req.model.value, envelope)
        result = normalize_response(response)

        if result.is_empty:
            logger.warning(f"{req.model.value} returned neither image nor text")
        else:
            logger.debug(f"{req.model.value} returned image={result.imageData is not None} text={result.text is not None}")
        return result


__all__ = ["GeminiImageEngine"]
