from __future__ import annotations

import base64
import binascii
from typing import Any

from fastmcp.utilities.types import Image as FastMCPImage
from loguru import logger

from ..shard import constants as C


def mime_to_format(mime: str | None) -> str:
    """Map a MIME type to the short image format name used by MCP clients."""
    if not mime:
        return "png"
    lower = mime.lower()
    if lower.endswith("/png"):
        return "png"
    if lower.endswith("/jpeg") or lower.endswith("/jpg"):
        return "jpeg"
    if lower.endswith("/webp"):
        return "webp"
    if lower.endswith("/gif"):
        return "gif"
    return lower.split("/")[-1] or "png"


def to_image_content(image_b64: str | None, mime: str | None) -> Any | None:
    """Convert a base64 image into a FastMCP ImageContent block.

    Returns None when there is no image or the payload is not valid base64;
    the structured output still carries the raw data in that case.
    """
    if not image_b64:
        return None

    mime = mime or C.DEFAULT_MIME
    try:
        data = base64.b64decode(image_b64, validate=True)
    except (binascii.Error, ValueError) as e:
        logger.warning(f"Model returned undecodable image data: {e}")
        return None
    return FastMCPImage(data=data, format=mime_to_format(mime)).to_image_content(mime_type=mime)


__all__ = ["mime_to_format", "to_image_content"]
