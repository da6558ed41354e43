"""Tests for the image generation and image editing adapters."""

from types import SimpleNamespace
from unittest.mock import AsyncMock, Mock

import pytest

from meme_pipeline.assets import ReferenceImage
from meme_pipeline.generator import (
    ImageEditor,
    ImageGenerator,
    ImagePart,
    TextPart,
    first_part_of_kind,
)

from conftest import fake_genai_client


def test_first_part_of_kind_scans_mixed_parts():
    parts = [TextPart("one"), ImagePart("image/png", b"a"), TextPart("two"), ImagePart("image/jpeg", b"b")]

    assert first_part_of_kind(parts, TextPart) == TextPart("one")
    assert first_part_of_kind(parts, ImagePart) == ImagePart("image/png", b"a")
    assert first_part_of_kind([TextPart("x")], ImagePart) is None
    assert first_part_of_kind([], TextPart) is None


def _replicate_client(output):
    return Mock(async_run=AsyncMock(return_value=output))


@pytest.mark.asyncio
async def test_image_generator_reads_file_output():
    file_output = Mock(aread=AsyncMock(return_value=b"png-bytes"))
    client = _replicate_client(file_output)

    images = await ImageGenerator(client=client).generate("a prompt", aspect_ratio="9:16")

    assert images == [b"png-bytes"]
    client.async_run.assert_awaited_once_with(
        "google/imagen-4-fast",
        input={"prompt": "a prompt", "aspect_ratio": "9:16", "output_format": "png"},
    )


@pytest.mark.asyncio
async def test_image_generator_accepts_list_output():
    outputs = [Mock(aread=AsyncMock(return_value=b"first")), b"second"]

    images = await ImageGenerator(client=_replicate_client(outputs)).generate("p", aspect_ratio="1:1")

    assert images == [b"first", b"second"]


@pytest.mark.asyncio
@pytest.mark.parametrize("output", [None, [], [Mock(aread=AsyncMock(return_value=b""))]])
async def test_image_generator_returns_nothing_for_empty_output(output):
    assert await ImageGenerator(client=_replicate_client(output)).generate("p", aspect_ratio="1:1") == []


@pytest.mark.asyncio
async def test_image_generator_requires_api_token(monkeypatch):
    monkeypatch.delenv("REPLICATE_API_TOKEN", raising=False)

    with pytest.raises(RuntimeError):
        await ImageGenerator().generate("p", aspect_ratio="1:1")


@pytest.mark.asyncio
async def test_image_editor_converts_response_parts(png_bytes):
    raw_parts = [
        SimpleNamespace(inline_data=None, text="Caption first"),
        SimpleNamespace(inline_data=SimpleNamespace(data=png_bytes, mime_type="image/png"), text=None),
        SimpleNamespace(inline_data=None, text=None),
    ]
    response = SimpleNamespace(candidates=[SimpleNamespace(content=SimpleNamespace(parts=raw_parts))])
    client = fake_genai_client(response)

    parts = await ImageEditor(client=client).edit(ReferenceImage("image/jpeg", b"jpeg-bytes"), "make it funny")

    assert parts == [TextPart("Caption first"), ImagePart("image/png", png_bytes)]
    kwargs = client.aio.models.generate_content.await_args.kwargs
    assert kwargs["model"] == "gemini-2.5-flash-image"
    assert len(kwargs["contents"]) == 2
    assert kwargs["config"].response_modalities == ["IMAGE", "TEXT"]


@pytest.mark.asyncio
async def test_image_editor_without_candidates_returns_no_parts():
    client = fake_genai_client(SimpleNamespace(candidates=None))

    assert await ImageEditor(client=client).edit(ReferenceImage("image/png", b"x"), "p") == []
