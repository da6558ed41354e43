import argparse
import asyncio
import os
import sys
from pathlib import Path
from typing import List, Optional

from dotenv import load_dotenv
from langchain_openai import ChatOpenAI

from meme_pipeline.assets import (
    ReferenceImage,
    load_reference_image,
    reference_image_from_data_uri,
    require_character,
)
from meme_pipeline.core import MemePipeline, OutputStyle
from meme_pipeline.errors import MemeGenerationError
from meme_pipeline.generator import ImageEditor, ImageGenerator
from meme_pipeline.messaging import CaptionGenerator
from meme_pipeline.render import save_meme_image
from meme_pipeline.trends import RealtimeTopicFetcher


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Describe a character and let AI turn it into a viral meme."
    )
    parser.add_argument(
        "character",
        help="Meme character description, e.g. 'A tired office worker cat wearing glasses'.",
    )
    parser.add_argument(
        "--image",
        default=None,
        help=(
            "Optional reference image (JPEG, PNG or WebP) to put the character into: "
            "a file path or a base64 data: URI."
        ),
    )
    parser.add_argument(
        "--style",
        choices=[s.value for s in OutputStyle],
        default=OutputStyle.SINGLE_IMAGE.value,
        help="Output layout. Ignored when a reference image is given.",
    )
    parser.add_argument(
        "--realtime",
        action="store_true",
        help="Base the meme on a real-time trending topic (found with Google Search).",
    )
    parser.add_argument(
        "--output",
        type=Path,
        default=Path("outputs") / "meme.png",
        help="Where to save the generated meme image.",
    )
    parser.add_argument(
        "--burn-caption",
        action="store_true",
        help="Draw the caption onto the saved image.",
    )
    return parser.parse_args(argv)


def read_reference_image(value: str) -> ReferenceImage:
    if value.startswith("data:"):
        return reference_image_from_data_uri(value)
    return load_reference_image(Path(value))


def build_pipeline() -> MemePipeline:
    # Captions use OpenAI via LangChain; without a key the caption adapter
    # fails loudly when called.
    api_key = os.environ.get("OPENAI_API_KEY")
    llm = ChatOpenAI(model="gpt-4o-mini", temperature=0.9, api_key=api_key) if api_key else None

    # Grounded search and image editing share one Gemini client.
    gemini_client = None
    gemini_key = os.environ.get("GEMINI_API_KEY")
    if gemini_key:
        from google import genai

        gemini_client = genai.Client(api_key=gemini_key)

    return MemePipeline(
        caption_generator=CaptionGenerator(llm=llm),
        image_generator=ImageGenerator(),
        image_editor=ImageEditor(client=gemini_client),
        trend_fetcher=RealtimeTopicFetcher(client=gemini_client),
    )


def main(argv: Optional[List[str]] = None) -> int:
    # Load environment variables from a local .env file if present
    # (e.g. OPENAI_API_KEY=sk-..., REPLICATE_API_TOKEN=..., GEMINI_API_KEY=...).
    load_dotenv()

    args = parse_args(argv)
    style = OutputStyle(args.style)
    use_realtime = args.realtime

    try:
        character = require_character(args.character)
        reference_image = read_reference_image(args.image) if args.image else None

        if reference_image is not None:
            if style is not OutputStyle.SINGLE_IMAGE or use_realtime:
                print("ℹ️  A reference image was given: using a single image without real-time trends.")
            style, use_realtime = OutputStyle.SINGLE_IMAGE, False

        pipeline = build_pipeline()
        result = asyncio.run(
            pipeline.generate(
                character,
                reference_image=reference_image,
                style=style,
                use_realtime=use_realtime,
            )
        )
    except MemeGenerationError as e:
        print(f"❌ {e}", file=sys.stderr)
        return 1

    print(f'💬 "{result.caption}"')
    if result.sources:
        print("📚 Sources:")
        for source in result.sources:
            print(f"   - {source.title}: {source.uri}")

    try:
        output_path = save_meme_image(result, args.output, burn_caption=args.burn_caption)
    except (ValueError, OSError) as e:
        print(f"❌ Could not save image: {e}", file=sys.stderr)
        return 1

    print(f"✅ Meme saved to {output_path}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
