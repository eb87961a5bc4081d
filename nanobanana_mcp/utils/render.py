from __future__ import annotations

import json
from typing import Any

import jinja2

from ..engines.catalog import QUICK_REFERENCE
from ..schema import ImageToolStructured, ListModelsResponse
from ..shard import constants as C
from ..shard.enums import ResponseFormat, ToolName
from .error_helpers import troubleshooting_tips

# ---------------------------------------------------------------------------
# Jinja2 templates for the human-readable half of each tool result
# ---------------------------------------------------------------------------

_ENV = jinja2.Environment(
    autoescape=False,
    trim_blocks=True,
    lstrip_blocks=True,
    keep_trailing_newline=False,
)

_SUCCESS_TEMPLATE = _ENV.from_string(
    """
✅ {{ labels.success }}

**Model:** {{ out.model }}
{% if out.imageCount is not none %}
**Input Images:** {{ out.imageCount }}
{% endif %}
**{{ labels.prompt }}:** {{ prompt_preview }}
{% if out.text %}

**Model Response:**
{{ out.text }}
{% endif %}
{% if out.imageData %}

**{{ labels.image }}:** Base64 data available ({{ out.mimeType }})
Data length: {{ out.imageData | length }} characters
{% endif %}
{% if not out.text and not out.imageData %}

The model returned neither an image nor text. Try rephrasing the prompt.
{% endif %}
"""
)

_FAILURE_TEMPLATE = _ENV.from_string(
    """
❌ {{ labels.failure }}

**Error:** {{ out.error }}
{% if tips %}

**Troubleshooting:**
{% for tip in tips %}
- {{ tip }}
{% endfor %}
{% endif %}
"""
)

_MODELS_TEMPLATE = _ENV.from_string(
    """
# Nano Banana Image Generation Models

{% for m in models %}
## {{ m.name }}

**Model ID:** `{{ m.id.value }}`

{{ m.description }}

**Max Resolution:** {{ m.maxResolution.value if m.maxResolution else "n/a" }}

**Features:**
{% for feature in m.features %}
- {{ feature }}
{% endfor %}

---

{% endfor %}
## Quick Reference

| Model | Best For | Max Res |
|-------|----------|---------|
{% for label, best_for, max_res in quick_reference %}
| {{ label }} | {{ best_for }} | {{ max_res }} |
{% endfor %}
"""
)

_LABELS: dict[str, dict[str, str]] = {
    ToolName.GENERATE_IMAGE: {"success": "Image generated successfully", "failure": "Image generation failed", "prompt": "Prompt", "image": "Image"},
    ToolName.EDIT_IMAGE: {"success": "Image edited successfully", "failure": "Image editing failed", "prompt": "Edit", "image": "Edited Image"},
    ToolName.COMPOSE_IMAGES: {"success": "Images composed successfully", "failure": "Image composition failed", "prompt": "Prompt", "image": "Composed Image"},
}


def preview_prompt(prompt: str, limit: int = C.PROMPT_PREVIEW_LENGTH) -> str:
    """Truncate a prompt for display, marking the cut with ``...``."""
    if len(prompt) <= limit:
        return prompt
    return prompt[:limit] + "..."


def render_image_result(tool_name: str, out: ImageToolStructured) -> str:
    """Render the markdown text block for a generate/edit/compose result."""
    labels = _LABELS[tool_name]
    if out.success:
        return _SUCCESS_TEMPLATE.render(labels=labels, out=out, prompt_preview=preview_prompt(out.prompt)).strip()
    return _FAILURE_TEMPLATE.render(labels=labels, out=out, tips=troubleshooting_tips(tool_name)).strip()


def render_models(resp: ListModelsResponse, response_format: ResponseFormat = ResponseFormat.MARKDOWN) -> str:
    """Render the model catalog as markdown or pretty-printed JSON."""
    if response_format == ResponseFormat.JSON:
        payload: dict[str, Any] = resp.model_dump(mode="json", exclude_none=True)
        return json.dumps(payload, indent=2)
    return _MODELS_TEMPLATE.render(models=resp.models, quick_reference=QUICK_REFERENCE).strip() + "\n"


__all__ = ["preview_prompt", "render_image_result", "render_models"]
