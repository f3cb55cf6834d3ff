import asyncio
import logging
from typing import Dict, List, Optional

import httpx

from app.settings import Settings
from domain.errors import UpstreamCallFailed

logger = logging.getLogger(__name__)

OPENAI_CHAT_URL = "https://api.openai.com/v1/chat/completions"
OPENROUTER_CHAT_URL = "https://openrouter.ai/api/v1/chat/completions"


def _is_retriable(status: int) -> bool:
    return status >= 500 or status in {408, 429}


class LLMClient:
    """Chat-completion client for the OpenAI-compatible providers.

    One instance is built per application and handed to the endpoints as a
    dependency. ``transport`` lets tests swap the network for
    ``httpx.MockTransport``.
    """

    def __init__(self, settings: Settings, transport: Optional[httpx.AsyncBaseTransport] = None):
        self.settings = settings
        self.transport = transport

    async def _post_with_retries(self, url: str, headers: Dict[str, str], payload: Dict) -> Dict:
        max_attempts = max(1, self.settings.LLM_MAX_ATTEMPTS)
        backoff = self.settings.LLM_BACKOFF_SECONDS
        for attempt in range(1, max_attempts + 1):
            try:
                async with httpx.AsyncClient(
                    timeout=self.settings.LLM_TIMEOUT_SECONDS, transport=self.transport
                ) as client:
                    response = await client.post(url, headers=headers, json=payload)
                response.raise_for_status()
                try:
                    return response.json()
                except ValueError as exc:
                    raise UpstreamCallFailed(
                        "Language model API returned an unexpected body") from exc
            except httpx.HTTPStatusError as exc:
                status = exc.response.status_code
                if not _is_retriable(status) or attempt == max_attempts:
                    raise UpstreamCallFailed(
                        f"Language model API returned HTTP {status}") from exc
                logger.warning("LLM call got HTTP %s (attempt %d/%d), retrying in %.1fs",
                               status, attempt, max_attempts, backoff)
            except httpx.RequestError as exc:
                if attempt == max_attempts:
                    raise UpstreamCallFailed(
                        f"Language model API unreachable: {exc}") from exc
                logger.warning("LLM call failed: %s (attempt %d/%d), retrying in %.1fs",
                               exc, attempt, max_attempts, backoff)
            await asyncio.sleep(backoff)
            backoff *= 2
        raise UpstreamCallFailed("Unexpected retry exhaustion")

    def _provider(self):
        s = self.settings
        if s.OPENAI_API_KEY:
            return OPENAI_CHAT_URL, {"Authorization": f"Bearer {s.OPENAI_API_KEY}"}, s.OPENAI_MODEL
        if s.OPENROUTER_API_KEY:
            headers = {
                "Authorization": f"Bearer {s.OPENROUTER_API_KEY}",
                "HTTP-Referer": "http://localhost",
                "X-Title": s.APP_NAME,
            }
            return OPENROUTER_CHAT_URL, headers, s.OPENROUTER_MODEL
        raise UpstreamCallFailed("No LLM provider configured")

    async def chat(self, messages: List[Dict[str, str]], temperature: float) -> str:
        url, headers, model = self._provider()
        payload = {"model": model, "messages": messages, "temperature": temperature}
        data = await self._post_with_retries(url, headers, payload)
        try:
            return data["choices"][0]["message"]["content"] or ""
        except (KeyError, IndexError, TypeError) as exc:
            raise UpstreamCallFailed("Language model API returned an unexpected body") from exc

    async def complete(self, prompt: str, temperature: float) -> str:
        return await self.chat([{"role": "user", "content": prompt}], temperature)
