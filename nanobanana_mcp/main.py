from __future__ import annotations

import argparse
import hmac
import sys
from typing import Annotated, Any

from fastmcp import FastMCP
from fastmcp.exceptions import ToolError
from fastmcp.tools.tool import ToolResult
from loguru import logger
from mcp.types import TextContent
from pydantic import Field
from starlette.middleware import Middleware
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import JSONResponse

from . import __version__
from .exceptions import InputValidationError
from .schema import ImageToolStructured
from .settings import get_settings
from .shard.enums import ToolName
from .shard.instructions import SERVER_INSTRUCTIONS, TOOL_DESCRIPTIONS
from .tools import run_image_tool, run_list_models
from .utils.image_utils import to_image_content
from .utils.render import render_image_result, render_models

SERVER_NAME = "nanobanana-mcp-server"
HEALTH_PATH = "/health"
HTTP_TRANSPORTS = {"http", "sse", "streamable-http"}

app = FastMCP(SERVER_NAME, instructions=SERVER_INSTRUCTIONS)

_ANNOTATIONS_IMAGE: dict[str, Any] = {
    "readOnlyHint": True,
    "destructiveHint": False,
    "idempotentHint": False,
    "openWorldHint": True,
}

_MODEL_DESCRIPTION = (
    "Model to use: 'gemini-3-pro-image-preview' (Nano Banana Pro, default) for best quality and features, "
    "'gemini-2.5-flash-image' (Nano Banana) for faster generation."
)
_ASPECT_RATIO_DESCRIPTION = "Aspect ratio: 1:1, 2:3, 3:2, 3:4, 4:3, 4:5, 5:4, 9:16, 16:9, 21:9. Default: varies by prompt."
_RESOLUTION_DESCRIPTION = "Resolution (Nano Banana Pro only): 1K, 2K, 4K. Must use uppercase 'K'. Default: 1K."


def _params(**kwargs: Any) -> dict[str, Any]:
    """Drop omitted optional arguments so input defaults apply."""
    return {k: v for k, v in kwargs.items() if v is not None}


def _image_tool_result(tool_name: ToolName, out: ImageToolStructured) -> ToolResult:
    contents: list[Any] = [TextContent(type="text", text=render_image_result(tool_name, out))]
    if out.success:
        image = to_image_content(out.imageData, out.mimeType)
        if image is not None:
            contents.append(image)
    return ToolResult(content=contents, structured_content=out.to_structured())


@app.tool(
    name=ToolName.GENERATE_IMAGE.value,
    description=TOOL_DESCRIPTIONS[ToolName.GENERATE_IMAGE],
    annotations={"title": "Generate Image with Nano Banana", **_ANNOTATIONS_IMAGE},
)
async def mcp_generate_image(
    prompt: Annotated[str, Field(description="Text description of the image to generate (1-10000 characters).")],
    model: Annotated[str | None, Field(description=_MODEL_DESCRIPTION)] = None,
    aspect_ratio: Annotated[str | None, Field(description=_ASPECT_RATIO_DESCRIPTION)] = None,
    resolution: Annotated[str | None, Field(description=_RESOLUTION_DESCRIPTION)] = None,
    use_google_search: Annotated[
        bool | None,
        Field(description="Enable Google Search grounding for real-time information (Nano Banana Pro only). Default: false."),
    ] = None,
) -> ToolResult:
    """Generate an image from a text prompt."""
    params = _params(prompt=prompt, model=model, aspect_ratio=aspect_ratio, resolution=resolution, use_google_search=use_google_search)
    out = await run_image_tool(ToolName.GENERATE_IMAGE, params)
    return _image_tool_result(ToolName.GENERATE_IMAGE, out)


@app.tool(
    name=ToolName.EDIT_IMAGE.value,
    description=TOOL_DESCRIPTIONS[ToolName.EDIT_IMAGE],
    annotations={"title": "Edit Image with Nano Banana", **_ANNOTATIONS_IMAGE},
)
async def mcp_edit_image(
    prompt: Annotated[str, Field(description="Description of the edit to make (1-10000 characters).")],
    image_base64: Annotated[str, Field(description="Base64-encoded image data to edit. Do not include a data URI prefix.")],
    image_mime_type: Annotated[str, Field(description="MIME type: image/png, image/jpeg, image/jpg, image/gif or image/webp.")],
    model: Annotated[str | None, Field(description=_MODEL_DESCRIPTION)] = None,
    aspect_ratio: Annotated[str | None, Field(description=_ASPECT_RATIO_DESCRIPTION)] = None,
    resolution: Annotated[str | None, Field(description=_RESOLUTION_DESCRIPTION)] = None,
) -> ToolResult:
    """Edit one image with a text instruction."""
    params = _params(
        prompt=prompt,
        image_base64=image_base64,
        image_mime_type=image_mime_type,
        model=model,
        aspect_ratio=aspect_ratio,
        resolution=resolution,
    )
    out = await run_image_tool(ToolName.EDIT_IMAGE, params)
    return _image_tool_result(ToolName.EDIT_IMAGE, out)


@app.tool(
    name=ToolName.COMPOSE_IMAGES.value,
    description=TOOL_DESCRIPTIONS[ToolName.COMPOSE_IMAGES],
    annotations={"title": "Compose Multiple Images with Nano Banana Pro", **_ANNOTATIONS_IMAGE},
)
async def mcp_compose_images(
    prompt: Annotated[str, Field(description="Description of how to compose the images (1-10000 characters).")],
    images: Annotated[
        list[dict[str, Any]],
        Field(description="1 to 14 reference images, each {'base64': <data>, 'mime_type': <image/png|jpeg|jpg|gif|webp>}."),
    ],
    model: Annotated[str | None, Field(description="Must be 'gemini-3-pro-image-preview' (Nano Banana Pro) if given.")] = None,
    aspect_ratio: Annotated[str | None, Field(description=_ASPECT_RATIO_DESCRIPTION)] = None,
    resolution: Annotated[str | None, Field(description=_RESOLUTION_DESCRIPTION)] = None,
) -> ToolResult:
    """Compose a new image from several reference images."""
    params = _params(prompt=prompt, images=images, model=model, aspect_ratio=aspect_ratio, resolution=resolution)
    out = await run_image_tool(ToolName.COMPOSE_IMAGES, params)
    return _image_tool_result(ToolName.COMPOSE_IMAGES, out)


@app.tool(
    name=ToolName.LIST_MODELS.value,
    description=TOOL_DESCRIPTIONS[ToolName.LIST_MODELS],
    annotations={
        "title": "List Nano Banana Models",
        "readOnlyHint": True,
        "destructiveHint": False,
        "idempotentHint": True,
        "openWorldHint": False,
    },
)
async def mcp_list_models(
    response_format: Annotated[str | None, Field(description="Output format: 'markdown' (default) or 'json'.")] = None,
) -> ToolResult:
    """Return the static model catalog."""
    try:
        req, resp = run_list_models(_params(response_format=response_format))
    except InputValidationError as e:
        raise ToolError(e.user_message) from e
    return ToolResult(
        content=[TextContent(type="text", text=render_models(resp, req.response_format))],
        structured_content=resp.model_dump(mode="json", exclude_none=True),
    )


@app.custom_route(HEALTH_PATH, methods=["GET"])
async def health_check(request: Request) -> JSONResponse:
    return JSONResponse({"status": "ok", "server": SERVER_NAME, "version": __version__})


# ------------------------------ HTTP auth gate ------------------------------ #


def extract_bearer_token(header: str | None) -> str | None:
    """Accept both ``Bearer <token>`` and a raw token."""
    if not header:
        return None
    if header.startswith("Bearer "):
        return header[len("Bearer ") :]
    return header


class BearerTokenMiddleware(BaseHTTPMiddleware):
    """Reject HTTP requests without the configured bearer token (health excluded)."""

    def __init__(self, app: Any, token: str) -> None:
        super().__init__(app)
        self.token = token

    async def dispatch(self, request: Request, call_next):
        if request.url.path == HEALTH_PATH:
            return await call_next(request)
        supplied = extract_bearer_token(request.headers.get("authorization")) or ""
        if not hmac.compare_digest(supplied.encode(), self.token.encode()):
            return JSONResponse({"error": "Unauthorized - invalid or missing bearer token"}, status_code=401)
        return await call_next(request)


def build_http_middleware(token: str | None) -> list[Middleware]:
    if not token:
        return []
    return [Middleware(BearerTokenMiddleware, token=token)]


def configure_logging(level: str) -> None:
    # stdout carries the stdio transport; keep logs on stderr.
    logger.remove()
    logger.add(sys.stderr, level=level.upper())


def main() -> None:
    settings = get_settings()

    parser = argparse.ArgumentParser(description="Nano Banana MCP Server")
    parser.add_argument(
        "--transport",
        choices=["stdio", "http", "sse", "streamable-http"],
        default=settings.transport,
        help="Transport to use (stdio, http, sse, streamable-http). Default: TRANSPORT or stdio",
    )
    parser.add_argument("--host", default=settings.host, help="Host to bind to for HTTP transports")
    parser.add_argument("--port", type=int, default=settings.port, help="Port to listen on for HTTP transports")
    args = parser.parse_args()

    configure_logging(settings.log_level)

    if not settings.has_gemini_key:
        logger.warning("GEMINI_API_KEY is not set; image tools will return errors until it is configured")

    # FastMCP's stdio transport does not accept host/port/middleware.
    if args.transport in HTTP_TRANSPORTS:
        logger.info(f"Starting {SERVER_NAME} on http://{args.host}:{args.port} with {args.transport} transport")
        if not settings.requires_auth:
            logger.warning("MCP_AUTH_TOKEN not set - HTTP server is unauthenticated!")
        app.run(
            transport=args.transport,
            host=args.host,
            port=args.port,
            middleware=build_http_middleware(settings.mcp_auth_token),
        )
    else:
        logger.info(f"Starting {SERVER_NAME} on stdio")
        app.run()


if __name__ == "__main__":
    main()
