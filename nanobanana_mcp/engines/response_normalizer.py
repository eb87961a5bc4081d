from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from ..exceptions import NoCandidatesError
from ..schema import NormalizedResult
from ..shard import constants as C


def _inline_data(part: Mapping[str, Any]) -> Mapping[str, Any] | None:
    # REST responses use camelCase; accept the snake_case request spelling too.
    inline = part.get("inlineData") or part.get("inline_data")
    if isinstance(inline, Mapping):
        return inline
    return None


def _first_candidate_parts(response: Mapping[str, Any]) -> list[Any]:
    candidates = response.get("candidates") or []
    if not candidates:
        raise NoCandidatesError()
    content = candidates[0].get("content") or {}
    return list(content.get("parts") or [])


def normalize_response(response: Mapping[str, Any]) -> NormalizedResult:
    """Reduce a ``generateContent`` response to a NormalizedResult.

    Only the first candidate is read. Thought parts are discarded, text
    parts are joined with newlines and the first inline image wins.

    Raises:
        NoCandidatesError: If the response carries no candidates.
    """
    parts = _first_candidate_parts(response)

    texts: list[str] = []
    image_data: str | None = None
    mime_type: str | None = None

    for part in parts:
        if not isinstance(part, Mapping):
            continue
        if part.get("thought"):
            continue
        text = part.get("text")
        if text:
            texts.append(text)
            continue
        inline = _inline_data(part)
        if inline is not None and image_data is None and inline.get("data"):
            image_data = inline["data"]
            mime_type = inline.get("mimeType") or inline.get("mime_type") or C.DEFAULT_MIME

    return NormalizedResult(
        imageData=image_data,
        mimeType=mime_type,
        text="\n".join(texts) if texts else None,
    )


__all__ = ["normalize_response"]
