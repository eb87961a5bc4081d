from __future__ import annotations

from enum import StrEnum


class Model(StrEnum):
    """Gemini image model IDs allowed by this server.

    Values are the identifiers used in the ``{model}:generateContent`` path.
    Nano Banana Pro is the higher-capability model and the default; it is the
    only model that honors resolution, search grounding and multi-image
    composition.
    """

    NANO_BANANA = "gemini-2.5-flash-image"
    NANO_BANANA_PRO = "gemini-3-pro-image-preview"

    @property
    def is_pro(self) -> bool:
        return self is Model.NANO_BANANA_PRO


class AspectRatio(StrEnum):
    """Native aspect ratio tokens accepted by ``imageConfig.aspectRatio``."""

    ONE_ONE = "1:1"
    TWO_THREE = "2:3"
    THREE_TWO = "3:2"
    THREE_FOUR = "3:4"
    FOUR_THREE = "4:3"
    FOUR_FIVE = "4:5"
    FIVE_FOUR = "5:4"
    NINE_SIXTEEN = "9:16"
    SIXTEEN_NINE = "16:9"
    TWENTY_ONE_NINE = "21:9"


class Resolution(StrEnum):
    """Native ``imageConfig.imageSize`` tiers (Nano Banana Pro only).

    Case-sensitive: the API only accepts an uppercase ``K``.
    """

    ONE_K = "1K"
    TWO_K = "2K"
    FOUR_K = "4K"


class ResponseModality(StrEnum):
    """Output modalities requested from ``generateContent``."""

    TEXT = "TEXT"
    IMAGE = "IMAGE"


class ResponseFormat(StrEnum):
    """Output format for the model listing tool."""

    MARKDOWN = "markdown"
    JSON = "json"


class ToolName(StrEnum):
    """MCP tool names exposed by the server."""

    GENERATE_IMAGE = "nanobanana_generate_image"
    EDIT_IMAGE = "nanobanana_edit_image"
    COMPOSE_IMAGES = "nanobanana_compose_images"
    LIST_MODELS = "nanobanana_list_models"


__all__ = ["Model", "AspectRatio", "Resolution", "ResponseModality", "ResponseFormat", "ToolName"]
