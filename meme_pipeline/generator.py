import os
from dataclasses import dataclass
from typing import Any, List, Optional, Sequence, Type, TypeVar, Union

from .assets import ReferenceImage


@dataclass(frozen=True)
class ImagePart:
    media_type: str
    data: bytes


@dataclass(frozen=True)
class TextPart:
    text: str


ContentPart = Union[ImagePart, TextPart]
PartT = TypeVar("PartT", ImagePart, TextPart)


def first_part_of_kind(parts: Sequence[ContentPart], kind: Type[PartT]) -> Optional[PartT]:
    for part in parts:
        if isinstance(part, kind):
            return part
    return None


class ImageGenerator:
    """
    Text-to-image adapter backed by Imagen 4 Fast on Replicate.

    Requires REPLICATE_API_TOKEN to be set in the environment unless a
    preconfigured `replicate.Client` is passed in.
    """

    def __init__(self, client: Any = None, model: str = "google/imagen-4-fast") -> None:
        self._client = client
        self.model = model

    def _get_client(self) -> Any:
        if self._client is None:
            import replicate

            api_token = os.environ.get("REPLICATE_API_TOKEN")
            if not api_token:
                raise RuntimeError(
                    "REPLICATE_API_TOKEN is not set. A valid API token is required for image generation."
                )
            self._client = replicate.Client(api_token=api_token)
        return self._client

    async def generate(self, prompt: str, aspect_ratio: str) -> List[bytes]:
        """
        Generate a single PNG image and return the raw bytes of every image
        the model produced (possibly none).
        """
        print(f"🎨 Final Image Generator Prompt: {prompt}")

        input_params = {
            "prompt": prompt,
            "aspect_ratio": aspect_ratio,
            "output_format": "png",
        }
        output = await self._get_client().async_run(self.model, input=input_params)

        if output is None:
            return []
        outputs = output if isinstance(output, (list, tuple)) else [output]

        images: List[bytes] = []
        for item in outputs:
            data = item if isinstance(item, bytes) else await item.aread()
            if data:
                images.append(data)
        return images


class ImageEditor:
    """
    Image-editing adapter backed by Gemini's native image model.

    The response is returned as an ordered list of `ImagePart` / `TextPart`.
    """

    def __init__(self, client: Any = None, model: str = "gemini-2.5-flash-image") -> None:
        self._client = client
        self.model = model

    def _get_client(self) -> Any:
        if self._client is None:
            from google import genai

            api_key = os.environ.get("GEMINI_API_KEY")
            if not api_key:
                raise RuntimeError(
                    "GEMINI_API_KEY is not set. A valid API key is required for image editing."
                )
            self._client = genai.Client(api_key=api_key)
        return self._client

    async def edit(self, image: ReferenceImage, prompt: str) -> List[ContentPart]:
        from google.genai import types

        print(f"🖌️  Editing reference image ({image.media_type}) with prompt: {prompt.strip()}")
        response = await self._get_client().aio.models.generate_content(
            model=self.model,
            contents=[
                types.Part.from_bytes(data=image.data, mime_type=image.media_type),
                types.Part.from_text(text=prompt),
            ],
            config=types.GenerateContentConfig(
                response_modalities=["IMAGE", "TEXT"],
            ),
        )

        candidates = response.candidates or []
        content = candidates[0].content if candidates else None

        parts: List[ContentPart] = []
        for part in (content.parts if content else None) or []:
            inline = getattr(part, "inline_data", None)
            if inline is not None and inline.data:
                parts.append(ImagePart(media_type=inline.mime_type or "image/png", data=inline.data))
            elif getattr(part, "text", None):
                parts.append(TextPart(text=part.text))
        return parts
