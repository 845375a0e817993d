# ecorater/llm_client.py
import logging
import re
from typing import Optional

from openai import OpenAI, OpenAIError

from ecorater import config
from ecorater.errors import UpstreamError

logger = logging.getLogger(__name__)

# --- cleaners ---------------------------------------------------------------
THINK_BLOCK = re.compile(r"(?is)\s*<think>.*?</think>\s*")


def _strip_think(text: str) -> str:
    t = text or ""
    t = THINK_BLOCK.sub("", t)
    t = re.sub(r"```(?:json|markdown|text)?", "", t)
    t = re.sub(r"\n{3,}", "\n\n", t)
    return t.strip()


# --- client -----------------------------------------------------------------
class GenerativeClient:
    """
    Chat-completions wrapper around Gemini's OpenAI-compatible endpoint.

    Built once at startup and shared by the request handlers.
    """

    def __init__(
        self,
        *,
        api_key: str = config.GEMINI_API_KEY,
        base_url: str = config.GEMINI_BASE,
        model: str = config.MODEL,
        timeout: float = config.LLM_TIMEOUT,
        client: Optional[OpenAI] = None,
    ):
        self.model = model
        self.client = client or OpenAI(base_url=base_url, api_key=api_key, timeout=timeout)

    def _messages(self, prompt: str, image_url: Optional[str]) -> list:
        if not image_url:
            return [{"role": "user", "content": prompt}]
        return [{
            "role": "user",
            "content": [
                {"type": "text", "text": prompt},
                {"type": "image_url", "image_url": {"url": image_url}},
            ],
        }]

    def generate_text(self, prompt: str, image_url: Optional[str] = None) -> str:
        try:
            resp = self.client.chat.completions.create(
                model=self.model,
                messages=self._messages(prompt, image_url),
                temperature=0.2,
            )
        except OpenAIError as e:
            raise UpstreamError("gemini", str(e)) from e

        content = resp.choices[0].message.content if resp.choices else None
        text = _strip_think(content or "")
        if not text:
            raise UpstreamError("gemini", "empty response")
        logger.debug("model response: %s", text)
        return text
