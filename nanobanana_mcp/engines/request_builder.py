from __future__ import annotations

from typing import Any

from loguru import logger

from ..schema import GenerationRequest, ReferenceImage
from ..shard import constants as C


def _text_part(text: str) -> dict[str, Any]:
    return {"text": text}


def _inline_part(image: ReferenceImage) -> dict[str, Any]:
    # Payload is forwarded as-is; the remote model decodes it.
    return {"inline_data": {"mime_type": image.mime_type, "data": image.data}}


def _build_image_config(req: GenerationRequest) -> dict[str, Any]:
    image_config: dict[str, Any] = {}
    if req.aspect_ratio is not None:
        image_config["aspectRatio"] = req.aspect_ratio.value
    if req.resolution is not None:
        if req.model.is_pro:
            image_config["imageSize"] = req.resolution.value
        else:
            logger.debug(f"Dropping resolution={req.resolution.value}: not supported by {req.model.value}")
    return image_config


def _build_tools(req: GenerationRequest) -> list[dict[str, Any]]:
    if not req.use_google_search:
        return []
    if not req.model.is_pro:
        logger.debug(f"Dropping use_google_search: not supported by {req.model.value}")
        return []
    return [{"google_search": {}}]


def build_generate_content_request(req: GenerationRequest) -> dict[str, Any]:
    """Map a GenerationRequest to a ``generateContent`` request body.

    One content block holds the prompt text followed by one inline part per
    reference image, in input order. Both TEXT and IMAGE output modalities
    are always requested. ``imageConfig`` and ``tools`` are only present when
    they carry something.
    """
    parts: list[dict[str, Any]] = [_text_part(req.prompt)]
    parts.extend(_inline_part(image) for image in req.reference_images)

    generation_config: dict[str, Any] = {"responseModalities": list(C.RESPONSE_MODALITIES)}
    image_config = _build_image_config(req)
    if image_config:
        generation_config["imageConfig"] = image_config

    envelope: dict[str, Any] = {
        "contents": [{"parts": parts}],
        "generationConfig": generation_config,
    }

    tools = _build_tools(req)
    if tools:
        envelope["tools"] = tools

    return envelope


__all__ = ["build_generate_content_request"]
