import asyncio
from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, Optional, Tuple

from .assets import ReferenceImage
from .catalog import ScenarioSelector
from .errors import (
    EDITED_IMAGE_MISSING,
    GENERATED_IMAGE_MISSING,
    GenerationError,
    MemeGenerationError,
    RemoteCallError,
    UnknownError,
    ValidationError,
)
from .generator import ImageEditor, ImageGenerator, ImagePart, TextPart, first_part_of_kind
from .messaging import CaptionGenerator, clean_caption
from .render import to_data_uri
from .trends import RealtimeTopicFetcher, SourceCitation


class OutputStyle(str, Enum):
    SINGLE_IMAGE = "single-image"
    WEBTOON = "webtoon"
    CONTRAST = "contrast"


@dataclass(frozen=True)
class StyleTemplate:
    aspect_ratio: str
    image_prompt: str
    caption_prompt: str

    def render(self, character: str, scenario: str) -> Tuple[str, str]:
        return (
            self.image_prompt.format(character=character, scenario=scenario),
            self.caption_prompt.format(character=character, scenario=scenario),
        )


STYLE_TEMPLATES: Dict[OutputStyle, StyleTemplate] = {
    OutputStyle.SINGLE_IMAGE: StyleTemplate(
        aspect_ratio="1:1",
        image_prompt=(
            "A meme of '{character}' {scenario}. "
            "Style: Internet meme, funny, relatable, shareable, high quality digital art."
        ),
        caption_prompt=(
            "Create a short, witty, and funny caption for a meme. "
            "The meme is about: Character: {character}, Scenario: {scenario}. "
            "The caption should be in English and suitable for a speech bubble. "
            'Make it impactful and viral-worthy. Example: "Is this... for real?". '
            "Just return the caption text, nothing else."
        ),
    ),
    OutputStyle.WEBTOON: StyleTemplate(
        aspect_ratio="9:16",
        image_prompt=(
            "A 4-panel vertical webtoon comic strip. The character is '{character}'. "
            "The scenario is: {scenario}. "
            "The comic should tell a short, funny story ending with a punchline. "
            "Style: simple webtoon art, humorous, meme-worthy, easy to read."
        ),
        caption_prompt=(
            "Create a short, witty, and funny caption for a 4-panel webtoon. "
            "The meme is about: Character: {character}, Scenario: {scenario}. "
            "The caption should summarize the joke or be the punchline. "
            "Just return the caption text, nothing else."
        ),
    ),
    OutputStyle.CONTRAST: StyleTemplate(
        aspect_ratio="16:9",
        image_prompt=(
            'A 2-panel "contrast" meme, like "Expectation vs. Reality" or "My plans vs. Reality". '
            "The character is '{character}'. The scenario is: {scenario}. "
            "The two panels should show a funny contrast. "
            "Style: internet meme, humorous, relatable."
        ),
        caption_prompt=(
            "Create a short, witty, and funny caption for a 2-panel contrast meme. "
            "The meme is about: Character: {character}, Scenario: {scenario}. "
            "The caption should highlight the contrast. "
            "Just return the caption text, nothing else."
        ),
    ),
}


def build_edit_prompt(character: str, scenario: str) -> str:
    return (
        "Turn this image into a meme.\n"
        f"Use this character: '{character}'.\n"
        f"Scenario: The character is {scenario}.\n"
        "Place the character into the image in a funny way, matching the style.\n"
        "Add a short, witty speech bubble in English that fits the scene.\n"
        "Style: Internet meme, funny, relatable, shareable."
    )


@dataclass(frozen=True)
class MemeResult:
    image_url: str
    caption: str
    sources: Tuple[SourceCitation, ...] = field(default_factory=tuple)


def resolve_inputs(
    reference_image: Optional[ReferenceImage],
    style: OutputStyle,
    use_realtime: bool,
) -> Tuple[OutputStyle, bool]:
    """
    A reference image always means a single edited image and no real-time
    trends, whatever the caller asked for.
    """
    if reference_image is not None:
        return OutputStyle.SINGLE_IMAGE, False
    try:
        return OutputStyle(style), use_realtime
    except ValueError as e:
        choices = ", ".join(s.value for s in OutputStyle)
        raise ValidationError(f"Unknown output style {style!r}. Choose one of: {choices}.") from e


class MemePipeline:
    """
    Orchestrates a single meme generation:
    - pick a scenario (real-time trend or the offline topic catalog)
    - with a reference image: one image-edit call returning image + caption
    - otherwise: image generation and caption generation run concurrently
    - assemble a `MemeResult`
    """

    def __init__(
        self,
        caption_generator: CaptionGenerator,
        image_generator: ImageGenerator,
        image_editor: ImageEditor,
        trend_fetcher: RealtimeTopicFetcher,
        scenario_selector: Optional[ScenarioSelector] = None,
    ) -> None:
        self.caption_generator = caption_generator
        self.image_generator = image_generator
        self.image_editor = image_editor
        self.trend_fetcher = trend_fetcher
        self.scenario_selector = scenario_selector or ScenarioSelector()

    async def generate(
        self,
        character: str,
        reference_image: Optional[ReferenceImage] = None,
        style: OutputStyle = OutputStyle.SINGLE_IMAGE,
        use_realtime: bool = False,
    ) -> MemeResult:
        style, use_realtime = resolve_inputs(reference_image, style, use_realtime)

        # Real-time failures propagate as RealtimeFetchError; there is no
        # silent fallback to the offline catalog.
        scenario, sources = await self._build_scenario(use_realtime)
        print(f"🎲 Scenario: {scenario}")

        try:
            if reference_image is not None:
                return await self._edit_reference_image(character, scenario, reference_image)
            return await self._generate_from_text(character, scenario, style, sources)
        except MemeGenerationError:
            raise
        except Exception as e:
            print(f"❌ Error generating meme: {e!r}")
            if not str(e):
                raise UnknownError() from e
            raise RemoteCallError(f"Failed to generate meme: {e}") from e

    async def _build_scenario(self, use_realtime: bool) -> Tuple[str, Tuple[SourceCitation, ...]]:
        if not use_realtime:
            return self.scenario_selector.sample(), ()

        trending = await self.trend_fetcher.fetch_trending()
        reaction = self.scenario_selector.sample_reaction()
        return f"{reaction} the news that {trending.topic}", trending.citations

    async def _edit_reference_image(
        self,
        character: str,
        scenario: str,
        reference_image: ReferenceImage,
    ) -> MemeResult:
        parts = await self.image_editor.edit(reference_image, build_edit_prompt(character, scenario))

        image = first_part_of_kind(parts, ImagePart)
        if image is None:
            raise GenerationError(EDITED_IMAGE_MISSING)
        text = first_part_of_kind(parts, TextPart)

        return MemeResult(
            image_url=to_data_uri(image.media_type, image.data),
            caption=clean_caption(text.text if text else ""),
        )

    async def _generate_from_text(
        self,
        character: str,
        scenario: str,
        style: OutputStyle,
        sources: Tuple[SourceCitation, ...],
    ) -> MemeResult:
        template = STYLE_TEMPLATES[style]
        image_prompt, caption_prompt = template.render(character, scenario)

        images, caption = await asyncio.gather(
            self.image_generator.generate(image_prompt, aspect_ratio=template.aspect_ratio),
            self.caption_generator.generate(caption_prompt),
        )
        if not images:
            raise GenerationError(GENERATED_IMAGE_MISSING)

        return MemeResult(
            image_url=to_data_uri("image/png", images[0]),
            caption=clean_caption(caption),
            sources=sources,
        )
