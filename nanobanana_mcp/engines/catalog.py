from __future__ import annotations

from ..schema import ListModelsResponse, ModelInfo
from ..shard.enums import Model, Resolution

# Static capability metadata for the list models tool.
MODEL_CATALOG: tuple[ModelInfo, ...] = (
    ModelInfo(
        id=Model.NANO_BANANA_PRO,
        name="Nano Banana Pro (Gemini 3 Pro Image)",
        description=(
            "State-of-the-art image generation and editing model. Optimized for professional asset production "
            "with advanced reasoning, high-fidelity text rendering, and up to 4K resolution."
        ),
        features=[
            "High-resolution output (1K, 2K, 4K)",
            "Advanced text rendering (legible, stylized text)",
            "Google Search grounding for real-time data",
            "Up to 14 reference images for composition",
            "Thinking mode for complex prompts",
            "Multi-turn conversation for iterative refinement",
        ],
        maxResolution=Resolution.FOUR_K,
    ),
    ModelInfo(
        id=Model.NANO_BANANA,
        name="Nano Banana (Gemini 2.5 Flash Image)",
        description="Fast, low-latency image generation model. Great for quick experimentation, iteration, and high-volume generation.",
        features=[
            "Fast generation speed",
            "Low latency",
            "Good for batch processing",
            "Text-to-image generation",
            "Image editing",
            "Multi-turn conversation",
        ],
        maxResolution=Resolution.ONE_K,
    ),
)

# Rows for the markdown quick-reference table: (label, best for, max resolution)
QUICK_REFERENCE: tuple[tuple[str, str, str], ...] = (
    ("Nano Banana Pro", "Professional assets, text in images, 4K output", Resolution.FOUR_K.value),
    ("Nano Banana", "Fast iteration, batch processing", Resolution.ONE_K.value),
)


def list_models() -> ListModelsResponse:
    return ListModelsResponse(models=[info.model_copy(deep=True) for info in MODEL_CATALOG])


__all__ = ["MODEL_CATALOG", "QUICK_REFERENCE", "list_models"]
