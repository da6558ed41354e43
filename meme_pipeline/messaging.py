from typing import Any

FALLBACK_CAPTION = "Could not generate a witty comment. Please try again!"


def clean_caption(text: str) -> str:
    """
    Trim model output and drop one wrapping double quote from each end.

    Returns `FALLBACK_CAPTION` when nothing is left.
    """
    caption = (text or "").strip()
    if caption.startswith('"'):
        caption = caption[1:]
    if caption.endswith('"'):
        caption = caption[:-1]
    return caption or FALLBACK_CAPTION


class CaptionGenerator:
    """
    Adapter for LLM-powered meme captions.

    `llm` is any LangChain chat model (e.g. `ChatOpenAI`).
    """

    def __init__(self, llm: Any) -> None:
        self.llm = llm

    async def generate(self, prompt: str) -> str:
        if self.llm is None:
            raise RuntimeError(
                "CaptionGenerator.llm is None. Configure a real LLM instance "
                "(set OPENAI_API_KEY) before calling generate()."
            )

        print("🤖 Calling the LLM for a meme caption...")
        raw = await self.llm.ainvoke(prompt)
        text = getattr(raw, "content", raw)
        if isinstance(text, list):
            # Chat models may return a list of content blocks.
            text = "".join(
                block if isinstance(block, str) else str(block.get("text", ""))
                for block in text
            )
        return text if isinstance(text, str) else ""
