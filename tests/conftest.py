"""Pytest configuration and fixtures."""

import io
import random
from types import SimpleNamespace
from unittest.mock import AsyncMock, Mock

import pytest
from PIL import Image

from meme_pipeline.catalog import ScenarioSelector
from meme_pipeline.core import MemePipeline
from meme_pipeline.trends import SourceCitation, TrendingTopic


def make_image_bytes(fmt: str = "PNG", size=(8, 8)) -> bytes:
    buf = io.BytesIO()
    Image.new("RGB", size, color=(200, 30, 90)).save(buf, format=fmt)
    return buf.getvalue()


def fake_genai_client(response=None, side_effect=None):
    """A stand-in for `google.genai.Client` exposing `aio.models.generate_content`."""
    generate_content = AsyncMock(return_value=response, side_effect=side_effect)
    return SimpleNamespace(aio=SimpleNamespace(models=SimpleNamespace(generate_content=generate_content)))


@pytest.fixture
def png_bytes() -> bytes:
    return make_image_bytes("PNG")


@pytest.fixture
def trending_topic() -> TrendingTopic:
    return TrendingTopic(
        topic="a cat was elected mayor of a small town",
        citations=(SourceCitation(uri="https://example.com/cat-mayor", title="Cat Mayor"),),
    )


@pytest.fixture
def adapters(png_bytes, trending_topic):
    """Mocked remote capabilities with sensible successful defaults."""
    return SimpleNamespace(
        caption=Mock(generate=AsyncMock(return_value='"When the coffee kicks in"')),
        image=Mock(generate=AsyncMock(return_value=[png_bytes])),
        editor=Mock(edit=AsyncMock(return_value=[])),
        trends=Mock(fetch_trending=AsyncMock(return_value=trending_topic)),
    )


@pytest.fixture
def pipeline(adapters) -> MemePipeline:
    return MemePipeline(
        caption_generator=adapters.caption,
        image_generator=adapters.image,
        image_editor=adapters.editor,
        trend_fetcher=adapters.trends,
        scenario_selector=ScenarioSelector(rng=random.Random(42)),
    )
