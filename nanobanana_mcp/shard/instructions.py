from __future__ import annotations

# Tool descriptions used by FastMCP when registering tools.
TOOL_DESCRIPTIONS: dict[str, str] = {
    "nanobanana_generate_image": (
        "Generate high-quality images from text descriptions using Google's Nano Banana models.\n\n"
        "For best results, be descriptive about subject and composition, style, lighting and atmosphere, "
        "colors and mood, and camera angle for photorealistic images.\n\n"
        "Models: 'gemini-3-pro-image-preview' (Nano Banana Pro, default; best quality, 4K, text rendering) or "
        "'gemini-2.5-flash-image' (Nano Banana; fast generation).\n"
        "resolution (1K, 2K, 4K) and use_google_search apply to Nano Banana Pro only and are ignored otherwise.\n\n"
        "Returns success, model, prompt, and on success imageData (base64), mimeType and any model text; "
        "on failure an error message."
    ),
    "nanobanana_edit_image": (
        "Edit an existing image using a text prompt with Google's Nano Banana models.\n\n"
        "Provide base64 image data (no data URI prefix) and its MIME type (image/png, image/jpeg, image/jpg, "
        "image/gif, image/webp), then describe what to add, remove or modify. The model keeps the original "
        "style and context while applying changes.\n\n"
        "Returns success, model, prompt, and on success imageData (base64), mimeType and any model text; "
        "on failure an error message."
    ),
    "nanobanana_compose_images": (
        "Compose a new image from up to 14 reference images with Nano Banana Pro.\n\n"
        "Use it for group compositions, style transfer, character consistency across scenes, or combining "
        "objects from different images. Up to 6 object images and 5 human images are recommended for "
        "high-fidelity inclusion; 14 images total at most. Each image needs base64 data and mime_type.\n\n"
        "Returns success, model, prompt, imageCount, and on success imageData (base64), mimeType and any "
        "model text; on failure an error message."
    ),
    "nanobanana_list_models": (
        "List available Nano Banana image generation models with their IDs, descriptions, features and "
        "maximum resolution. response_format: 'markdown' (default) or 'json'."
    ),
}


SERVER_INSTRUCTIONS: str = (
    "Nano Banana MCP Server - Agent Instructions.\n"
    "Role: This server exposes four tools backed by Google's Gemini image models: "
    "nanobanana_generate_image, nanobanana_edit_image, nanobanana_compose_images and nanobanana_list_models.\n\n"
    "Workflow (short):\n"
    "1) Call nanobanana_list_models if you need to pick between Nano Banana Pro and Nano Banana.\n"
    "2) Use nanobanana_generate_image for text-to-image, nanobanana_edit_image for a single input image, "
    "and nanobanana_compose_images for 1 to 14 reference images.\n\n"
    "Rules:\n"
    "- Pass images as raw base64 (no data URI prefix) together with their MIME type.\n"
    "- resolution and use_google_search only take effect on Nano Banana Pro.\n"
    "- Unknown parameters are rejected.\n\n"
    "Outputs: every image tool returns a structured payload with success, model and prompt, plus imageData, "
    "mimeType and text on success or error on failure. Failures never raise; check success."
)


__all__ = ["TOOL_DESCRIPTIONS", "SERVER_INSTRUCTIONS"]
