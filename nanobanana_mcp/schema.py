from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from .shard import constants as C
from .shard.enums import AspectRatio, Model, Resolution, ResponseFormat

# ------------------------------ Input contracts ------------------------------ #


class StrictInput(BaseModel):
    """Base for tool inputs: unknown fields are rejected, never passed through."""

    model_config = ConfigDict(extra="forbid")


class GenerateImageRequest(StrictInput):
    """Generate an image from a text prompt."""

    prompt: str = Field(
        min_length=C.MIN_PROMPT_LENGTH,
        max_length=C.MAX_PROMPT_LENGTH,
        description="Text description of the image to generate.",
    )
    model: Model = Field(default=C.DEFAULT_MODEL, description="Model id; defaults to Nano Banana Pro.")
    aspect_ratio: AspectRatio | None = Field(default=None, description="Aspect ratio of the generated image.")
    resolution: Resolution | None = Field(default=None, description="Output resolution (Nano Banana Pro only).")
    use_google_search: bool = Field(default=False, description="Enable Google Search grounding (Nano Banana Pro only).")


class EditImageRequest(StrictInput):
    """Edit a single base64-encoded image with a text instruction."""

    prompt: str = Field(
        min_length=C.MIN_PROMPT_LENGTH,
        max_length=C.MAX_PROMPT_LENGTH,
        description="Text description of the edit to make.",
    )
    image_base64: str = Field(min_length=1, description="Base64-encoded image data without a data URI prefix.")
    image_mime_type: str = Field(pattern=C.IMAGE_MIME_PATTERN, description="MIME type of the image.")
    model: Model = Field(default=C.DEFAULT_MODEL, description="Model id; defaults to Nano Banana Pro.")
    aspect_ratio: AspectRatio | None = Field(default=None, description="Aspect ratio of the edited image.")
    resolution: Resolution | None = Field(default=None, description="Output resolution (Nano Banana Pro only).")


class ComposeImage(StrictInput):
    """One reference image for composition."""

    base64: str = Field(min_length=1, description="Base64-encoded image data.")
    mime_type: str = Field(pattern=C.IMAGE_MIME_PATTERN, description="MIME type of the image.")


class ComposeImagesRequest(StrictInput):
    """Compose a new image from 1..14 reference images (Nano Banana Pro only)."""

    prompt: str = Field(
        min_length=C.MIN_PROMPT_LENGTH,
        max_length=C.MAX_PROMPT_LENGTH,
        description="Text description of how to compose the images.",
    )
    images: list[ComposeImage] = Field(
        min_length=C.MIN_COMPOSE_IMAGES,
        max_length=C.MAX_REFERENCE_IMAGES,
        description="Reference images in the order they should be presented to the model.",
    )
    model: Model = Field(default=C.COMPOSE_MODEL, description="Fixed to Nano Banana Pro.")
    aspect_ratio: AspectRatio | None = Field(default=None, description="Aspect ratio of the composed image.")
    resolution: Resolution | None = Field(default=None, description="Output resolution.")

    @field_validator("model")
    @classmethod
    def _only_pro(cls, v: Model) -> Model:
        if v != C.COMPOSE_MODEL:
            raise ValueError(f"multi-image composition requires {C.COMPOSE_MODEL.value}")
        return v


class ListModelsRequest(StrictInput):
    response_format: ResponseFormat = Field(default=ResponseFormat.MARKDOWN, description="'markdown' or 'json'.")


# ----------------------------- Semantic request ----------------------------- #


class ReferenceImage(BaseModel):
    """An input image carried to the model unchanged (no re-encoding)."""

    model_config = ConfigDict(frozen=True)

    data: str
    mime_type: str


class GenerationRequest(BaseModel):
    """Tool-agnostic generation input.

    Generate, edit and compose all reduce to this with 0, 1 or up to 14
    reference images respectively.
    """

    model_config = ConfigDict(frozen=True)

    prompt: str
    model: Model = C.DEFAULT_MODEL
    aspect_ratio: AspectRatio | None = None
    resolution: Resolution | None = None
    use_google_search: bool = False
    reference_images: tuple[ReferenceImage, ...] = ()

    @model_validator(mode="after")
    def _check_images(self) -> GenerationRequest:
        if len(self.reference_images) > C.MAX_REFERENCE_IMAGES:
            raise ValueError(f"Maximum of {C.MAX_REFERENCE_IMAGES} reference images allowed")
        if len(self.reference_images) > 1 and not self.model.is_pro:
            raise ValueError(f"Multiple reference images require {C.COMPOSE_MODEL.value}")
        return self

    @classmethod
    def from_generate(cls, req: GenerateImageRequest) -> GenerationRequest:
        return cls(
            prompt=req.prompt,
            model=req.model,
            aspect_ratio=req.aspect_ratio,
            resolution=req.resolution,
            use_google_search=req.use_google_search,
        )

    @classmethod
    def from_edit(cls, req: EditImageRequest) -> GenerationRequest:
        return cls(
            prompt=req.prompt,
            model=req.model,
            aspect_ratio=req.aspect_ratio,
            resolution=req.resolution,
            reference_images=(ReferenceImage(data=req.image_base64, mime_type=req.image_mime_type),),
        )

    @classmethod
    def from_compose(cls, req: ComposeImagesRequest) -> GenerationRequest:
        return cls(
            prompt=req.prompt,
            model=req.model,
            aspect_ratio=req.aspect_ratio,
            resolution=req.resolution,
            reference_images=tuple(ReferenceImage(data=img.base64, mime_type=img.mime_type) for img in req.images),
        )


# ------------------------------ Normalized result ---------------------------- #


class NormalizedResult(BaseModel):
    """Stable result of one generateContent call.

    All fields may be absent when the model returned neither text nor image.
    """

    imageData: str | None = Field(default=None, description="Base64-encoded image bytes.")
    mimeType: str | None = Field(default=None, description="MIME type of imageData.")
    text: str | None = Field(default=None, description="Model text parts joined with newlines.")

    @property
    def is_empty(self) -> bool:
        return self.imageData is None and self.text is None


# ------------------------------ Public tool output --------------------------- #


class ImageToolStructured(BaseModel):
    """Structured output shared by the generate, edit and compose tools."""

    success: bool = Field(description="True when the Gemini call succeeded.")
    model: str = Field(description="Model used (or requested) for the operation.")
    prompt: str = Field(description="Prompt as supplied by the caller.")
    imageCount: int | None = Field(default=None, description="Number of input images (compose only).")
    imageData: str | None = Field(default=None, description="Base64-encoded output image.")
    mimeType: str | None = Field(default=None, description="MIME type of the output image.")
    text: str | None = Field(default=None, description="Accompanying text from the model.")
    error: str | None = Field(default=None, description="Error message when success is false.")

    def to_structured(self) -> dict[str, Any]:
        """Serializable form with absent optional fields omitted."""
        return self.model_dump(exclude_none=True)


class ModelInfo(BaseModel):
    id: Model
    name: str
    description: str
    features: list[str] = Field(default_factory=list)
    maxResolution: Resolution | None = None


class ListModelsResponse(BaseModel):
    """Response for the list models tool."""

    models: list[ModelInfo] = Field(default_factory=list)


__all__ = [
    # inputs
    "StrictInput",
    "GenerateImageRequest",
    "EditImageRequest",
    "ComposeImage",
    "ComposeImagesRequest",
    "ListModelsRequest",
    # semantic
    "ReferenceImage",
    "GenerationRequest",
    "NormalizedResult",
    # outputs
    "ImageToolStructured",
    "ModelInfo",
    "ListModelsResponse",
]
