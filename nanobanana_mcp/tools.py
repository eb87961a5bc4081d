"""Tool invocation boundary.

Consumes ``(tool_name, raw_parameters)`` and returns a structured result.
Per-call failures (missing credential, invalid input, upstream errors) are
converted into ``success=False`` results here; nothing from a single bad
call propagates to the hosting process.
"""

from __future__ import annotations

from collections.abc import Callable, Mapping
from typing import Any

from loguru import logger
from pydantic import BaseModel

from .engines.catalog import list_models
from .engines.gemini import GeminiImageEngine
from .exceptions import ImageGenerationError
from .schema import (
    ComposeImagesRequest,
    EditImageRequest,
    GenerateImageRequest,
    GenerationRequest,
    ImageToolStructured,
    ListModelsRequest,
    ListModelsResponse,
)
from .shard import constants as C
from .shard.enums import ToolName
from .utils.error_helpers import validate_input

EngineFactory = Callable[[], GeminiImageEngine]

_IMAGE_TOOLS: dict[ToolName, tuple[type[BaseModel], Callable[[Any], GenerationRequest]]] = {
    ToolName.GENERATE_IMAGE: (GenerateImageRequest, GenerationRequest.from_generate),
    ToolName.EDIT_IMAGE: (EditImageRequest, GenerationRequest.from_edit),
    ToolName.COMPOSE_IMAGES: (ComposeImagesRequest, GenerationRequest.from_compose),
}


class UnknownToolError(LookupError):
    """Raised when a tool name is not served by this module."""


def _reported_model(tool_name: ToolName, raw: Mapping[str, Any], req: BaseModel | None) -> str:
    # Compose accepts no model choice, so failures always report the fixed id.
    if tool_name == ToolName.COMPOSE_IMAGES:
        return C.COMPOSE_MODEL.value
    if req is not None:
        return req.model.value  # type: ignore[attr-defined]
    supplied = raw.get("model")
    return str(supplied) if supplied else C.DEFAULT_MODEL.value


def _reported_prompt(raw: Mapping[str, Any]) -> str:
    prompt = raw.get("prompt")
    return prompt if isinstance(prompt, str) else ""


def _failure(tool_name: ToolName, raw: Mapping[str, Any], req: BaseModel | None, message: str) -> ImageToolStructured:
    return ImageToolStructured(
        success=False,
        model=_reported_model(tool_name, raw, req),
        prompt=_reported_prompt(raw),
        error=message,
    )


async def run_image_tool(tool_name: ToolName, raw: Mapping[str, Any] | None, engine_factory: EngineFactory | None = None) -> ImageToolStructured:
    """Run one generate/edit/compose invocation end to end."""
    raw = raw if isinstance(raw, Mapping) else {}
    request_cls, to_generation = _IMAGE_TOOLS[tool_name]
    factory = engine_factory or GeminiImageEngine.from_settings

    req: BaseModel | None = None
    try:
        req = validate_input(request_cls, raw)
        generation = to_generation(req)
        engine = factory()
        result = await engine.run(generation)
    except ImageGenerationError as e:
        logger.warning(f"{tool_name.value} failed ({e.code}): {e.user_message}")
        return _failure(tool_name, raw, req, e.user_message)
    except Exception as e:
        logger.exception(f"Unexpected error in {tool_name.value}: {type(e).__name__}: {e}")
        return _failure(tool_name, raw, req, str(e) or "Unknown error occurred")

    return ImageToolStructured(
        success=True,
        model=_reported_model(tool_name, raw, req),
        prompt=req.prompt,  # type: ignore[attr-defined]
        imageCount=len(req.images) if isinstance(req, ComposeImagesRequest) else None,
        imageData=result.imageData,
        mimeType=result.mimeType,
        text=result.text,
    )


def run_list_models(raw: Mapping[str, Any] | None) -> tuple[ListModelsRequest, ListModelsResponse]:
    """Validate list-models input and return it with the static catalog.

    Raises:
        InputValidationError: If the input carries unknown fields or an
            unsupported response format.
    """
    req = validate_input(ListModelsRequest, raw)
    return req, list_models()


async def invoke_tool(tool_name: str, raw: Mapping[str, Any] | None, *, engine_factory: EngineFactory | None = None) -> ImageToolStructured | ListModelsResponse:
    """Dispatch a tool call by name.

    Raises:
        UnknownToolError: If ``tool_name`` is not one of the served tools.
        InputValidationError: Only for the list models tool, which has no
            structured failure shape.
    """
    try:
        name = ToolName(tool_name)
    except ValueError:
        raise UnknownToolError(f"Unknown tool: {tool_name}") from None

    if name == ToolName.LIST_MODELS:
        _, response = run_list_models(raw)
        return response
    return await run_image_tool(name, raw, engine_factory)


__all__ = ["EngineFactory", "UnknownToolError", "run_image_tool", "run_list_models", "invoke_tool"]
