from __future__ import annotations

import pytest
from pydantic import ValidationError

from nanobanana_mcp.exceptions import InputValidationError
from nanobanana_mcp.schema import (
    ComposeImagesRequest,
    EditImageRequest,
    GenerateImageRequest,
    GenerationRequest,
    ImageToolStructured,
    ListModelsRequest,
    NormalizedResult,
    ReferenceImage,
)
from nanobanana_mcp.shard.enums import AspectRatio, Model, Resolution, ResponseFormat
from nanobanana_mcp.utils.error_helpers import validate_input


def _image(mime: str = "image/png") -> dict[str, str]:
    return {"base64": "aGVsbG8=", "mime_type": mime}


def test_generate_request_defaults():
    req = GenerateImageRequest(prompt="a red circle")

    assert req.model == Model.NANO_BANANA_PRO
    assert req.aspect_ratio is None
    assert req.resolution is None
    assert req.use_google_search is False


def test_generate_request_full():
    req = GenerateImageRequest.model_validate(
        {
            "prompt": "a red circle",
            "model": "gemini-2.5-flash-image",
            "aspect_ratio": "16:9",
            "resolution": "2K",
            "use_google_search": True,
        }
    )

    assert req.model == Model.NANO_BANANA
    assert req.aspect_ratio == AspectRatio.SIXTEEN_NINE
    assert req.resolution == Resolution.TWO_K
    assert req.use_google_search is True


def test_prompt_length_bounds():
    with pytest.raises(ValidationError):
        GenerateImageRequest(prompt="")

    assert len(GenerateImageRequest(prompt="x" * 10000).prompt) == 10000

    with pytest.raises(ValidationError):
        GenerateImageRequest(prompt="x" * 10001)


def test_unknown_model_rejected():
    with pytest.raises(ValidationError):
        GenerateImageRequest.model_validate({"prompt": "p", "model": "imagen-4.0-generate-001"})


@pytest.mark.parametrize("ratio", [r.value for r in AspectRatio])
def test_all_aspect_ratios_accepted(ratio):
    assert GenerateImageRequest.model_validate({"prompt": "p", "aspect_ratio": ratio}).aspect_ratio == ratio


def test_aspect_ratio_set_is_closed():
    assert len(AspectRatio) == 10
    with pytest.raises(ValidationError):
        GenerateImageRequest.model_validate({"prompt": "p", "aspect_ratio": "7:5"})


@pytest.mark.parametrize("resolution", ["4k", "8K", "1080p", ""])
def test_resolution_is_case_sensitive_and_closed(resolution):
    with pytest.raises(ValidationError):
        GenerateImageRequest.model_validate({"prompt": "p", "resolution": resolution})


def test_unknown_fields_rejected_everywhere():
    with pytest.raises(ValidationError):
        GenerateImageRequest.model_validate({"prompt": "p", "seed": 42})
    with pytest.raises(ValidationError):
        EditImageRequest.model_validate({"prompt": "p", "image_base64": "abc", "image_mime_type": "image/png", "mask": "m"})
    with pytest.raises(ValidationError):
        ComposeImagesRequest.model_validate({"prompt": "p", "images": [{**_image(), "name": "a.png"}]})
    with pytest.raises(ValidationError):
        ListModelsRequest.model_validate({"response_format": "json", "verbose": True})


def test_search_grounding_only_on_generate():
    with pytest.raises(ValidationError):
        EditImageRequest.model_validate(
            {"prompt": "p", "image_base64": "abc", "image_mime_type": "image/png", "use_google_search": True}
        )


@pytest.mark.parametrize("mime", ["image/png", "image/jpeg", "image/jpg", "image/gif", "image/webp"])
def test_allowed_mime_types(mime):
    req = EditImageRequest(prompt="p", image_base64="abc", image_mime_type=mime)
    assert req.image_mime_type == mime


@pytest.mark.parametrize(
    "mime",
    ["image/bmp", "image/svg+xml", "IMAGE/PNG", "image/png ", "text/plain", "image/", "png", "image/pngx"],
)
def test_rejected_mime_types_even_with_valid_base64(mime, png_b64):
    with pytest.raises(ValidationError):
        EditImageRequest(prompt="p", image_base64=png_b64, image_mime_type=mime)
    with pytest.raises(ValidationError):
        ComposeImagesRequest.model_validate({"prompt": "p", "images": [{"base64": png_b64, "mime_type": mime}]})


def test_empty_image_data_rejected():
    with pytest.raises(ValidationError):
        EditImageRequest(prompt="p", image_base64="", image_mime_type="image/png")
    with pytest.raises(ValidationError):
        ComposeImagesRequest.model_validate({"prompt": "p", "images": [{"base64": "", "mime_type": "image/png"}]})


def test_compose_image_count_bounds():
    with pytest.raises(ValidationError):
        ComposeImagesRequest.model_validate({"prompt": "p", "images": []})

    req = ComposeImagesRequest.model_validate({"prompt": "p", "images": [_image() for _ in range(14)]})
    assert len(req.images) == 14

    with pytest.raises(ValidationError):
        ComposeImagesRequest.model_validate({"prompt": "p", "images": [_image() for _ in range(15)]})


def test_compose_model_is_fixed_to_pro():
    req = ComposeImagesRequest.model_validate({"prompt": "p", "images": [_image()]})
    assert req.model == Model.NANO_BANANA_PRO

    req = ComposeImagesRequest.model_validate({"prompt": "p", "images": [_image()], "model": "gemini-3-pro-image-preview"})
    assert req.model == Model.NANO_BANANA_PRO

    with pytest.raises(ValidationError):
        ComposeImagesRequest.model_validate({"prompt": "p", "images": [_image()], "model": "gemini-2.5-flash-image"})


def test_list_models_request_defaults_to_markdown():
    assert ListModelsRequest().response_format == ResponseFormat.MARKDOWN
    with pytest.raises(ValidationError):
        ListModelsRequest.model_validate({"response_format": "yaml"})


def test_validate_input_reports_first_failing_constraint():
    with pytest.raises(InputValidationError) as exc_info:
        validate_input(GenerateImageRequest, {"prompt": "x" * 10001})

    assert exc_info.value.field == "prompt"
    assert str(exc_info.value).startswith("prompt: ")
    assert "10000" in str(exc_info.value)


def test_validate_input_unwraps_custom_validator_message():
    with pytest.raises(InputValidationError) as exc_info:
        validate_input(ComposeImagesRequest, {"prompt": "p", "images": [_image()], "model": "gemini-2.5-flash-image"})

    assert str(exc_info.value) == "model: multi-image composition requires gemini-3-pro-image-preview"


def test_validate_input_treats_none_as_empty():
    with pytest.raises(InputValidationError) as exc_info:
        validate_input(GenerateImageRequest, None)
    assert exc_info.value.field == "prompt"


def test_generation_request_from_tool_inputs():
    edit = EditImageRequest(prompt="hat", image_base64="abc", image_mime_type="image/jpeg", model=Model.NANO_BANANA)
    gen = GenerationRequest.from_edit(edit)
    assert gen.model == Model.NANO_BANANA
    assert gen.reference_images == (ReferenceImage(data="abc", mime_type="image/jpeg"),)

    compose = ComposeImagesRequest.model_validate({"prompt": "p", "images": [_image("image/png"), _image("image/webp")]})
    gen = GenerationRequest.from_compose(compose)
    assert [img.mime_type for img in gen.reference_images] == ["image/png", "image/webp"]


def test_generation_request_image_invariants():
    images = tuple(ReferenceImage(data="a", mime_type="image/png") for _ in range(15))
    with pytest.raises(ValidationError):
        GenerationRequest(prompt="p", reference_images=images)

    with pytest.raises(ValidationError):
        GenerationRequest(prompt="p", model=Model.NANO_BANANA, reference_images=images[:2])

    # A single reference image works with either model
    assert GenerationRequest(prompt="p", model=Model.NANO_BANANA, reference_images=images[:1])


def test_normalized_result_is_empty():
    assert NormalizedResult().is_empty
    assert not NormalizedResult(text="hi").is_empty
    assert not NormalizedResult(imageData="abc", mimeType="image/png").is_empty


def test_image_tool_structured_omits_absent_fields():
    out = ImageToolStructured(success=False, model="m", prompt="p", error="boom")

    assert out.to_structured() == {"success": False, "model": "m", "prompt": "p", "error": "boom"}
