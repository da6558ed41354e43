import os
from dataclasses import dataclass, field
from typing import Any, Iterable, List, Optional, Tuple

from .errors import RealtimeFetchError


TREND_PROMPT = (
    "Tell me about one recent, funny, or weird trending topic or viral internet "
    "event that would make a great meme. Be specific and concise."
)


@dataclass(frozen=True)
class SourceCitation:
    uri: str
    title: str


@dataclass(frozen=True)
class TrendingTopic:
    topic: str
    citations: Tuple[SourceCitation, ...] = field(default_factory=tuple)


def normalize_citations(chunks: Optional[Iterable[Any]]) -> Tuple[SourceCitation, ...]:
    """
    Map raw grounding chunks to `SourceCitation`s.

    Only web chunks with both a URI and a title are kept; the relative order
    of the kept chunks is preserved.
    """
    citations: List[SourceCitation] = []
    for chunk in chunks or ():
        web = getattr(chunk, "web", None)
        uri = getattr(web, "uri", None)
        title = getattr(web, "title", None)
        if uri and title:
            citations.append(SourceCitation(uri=uri, title=title))
    return tuple(citations)


class RealtimeTopicFetcher:
    """
    Asks Gemini, grounded with Google Search, for one current meme-worthy topic.
    """

    def __init__(self, client: Any = None, model: str = "gemini-2.5-flash") -> None:
        self._client = client
        self.model = model

    def _get_client(self) -> Any:
        if self._client is None:
            from google import genai

            api_key = os.environ.get("GEMINI_API_KEY")
            if not api_key:
                raise RuntimeError(
                    "GEMINI_API_KEY is not set. A valid API key is required for real-time trends."
                )
            self._client = genai.Client(api_key=api_key)
        return self._client

    async def fetch_trending(self) -> TrendingTopic:
        from google.genai import types

        try:
            print("🔎 Searching for a real-time trending topic...")
            response = await self._get_client().aio.models.generate_content(
                model=self.model,
                contents=TREND_PROMPT,
                config=types.GenerateContentConfig(
                    tools=[types.Tool(google_search=types.GoogleSearch())],
                ),
            )

            topic = (response.text or "").strip()
            if not topic:
                raise ValueError("AI could not find a trending topic.")

            candidates = response.candidates or []
            metadata = candidates[0].grounding_metadata if candidates else None
            chunks = metadata.grounding_chunks if metadata else None
        except Exception as e:
            print(f"⚠️  Error fetching real-time topic: {e}")
            raise RealtimeFetchError() from e

        print(f"📰 Trending topic: {topic}")
        return TrendingTopic(topic=topic, citations=normalize_citations(chunks))
