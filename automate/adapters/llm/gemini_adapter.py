"""Gemini generateContent adapter using aiohttp: implements LLMPort."""

import asyncio
from datetime import datetime
from typing import Any, Dict, List, Optional

import aiohttp

from automate.config import GeminiConfig
from automate.domain.commands import ImageCommand
from automate.domain.errors import GenerationError
from automate.infrastructure.usage import UsageLimitExceeded, UsageTracker
from automate.ports.outbound import PromptPart


class GeminiAdapter:
    """Single-turn calls to the Gemini REST API."""

    def __init__(self, config: GeminiConfig, usage_tracker: Optional[UsageTracker] = None):
        self.config = config
        self.usage_tracker = usage_tracker or UsageTracker()

    @property
    def is_configured(self) -> bool:
        return self.config.is_configured

    @property
    def url(self) -> str:
        return f"{self.config.api_base}/models/{self.config.model}:generateContent"

    @staticmethod
    def _to_part(part: PromptPart) -> Dict[str, Any]:
        if isinstance(part, ImageCommand):
            return {"inlineData": {"mimeType": part.mime_type, "data": part.to_base64()}}
        return {"text": part}

    def build_request(self, parts: List[PromptPart]) -> Dict[str, Any]:
        generation_config: Dict[str, Any] = dict(self.config.generation)
        if self.config.structured_output:
            generation_config["responseMimeType"] = "application/json"
        return {
            "contents": [
                {"role": "user", "parts": [self._to_part(p) for p in parts]},
            ],
            "generationConfig": generation_config,
        }

    @staticmethod
    def extract_text(data: Any) -> str:
        """Pull ``candidates[0].content.parts[0].text`` out of a response."""
        try:
            text = data["candidates"][0]["content"]["parts"][0]["text"]
        except (KeyError, IndexError, TypeError):
            raise GenerationError("Invalid response from Gemini API")
        if not isinstance(text, str):
            raise GenerationError("Invalid response from Gemini API")
        return text

    async def generate(self, parts: List[PromptPart]) -> str:
        if not self.is_configured:
            raise GenerationError("Gemini API key not configured")
        try:
            self.usage_tracker.check_limits()
        except UsageLimitExceeded as e:
            raise GenerationError(str(e)) from e

        print(f"[{datetime.now().isoformat()}] Calling Gemini ({self.config.model})")
        timeout = aiohttp.ClientTimeout(total=self.config.timeout_seconds)
        headers = {
            "Content-Type": "application/json",
            "x-goog-api-key": self.config.api_key,
        }
        try:
            async with aiohttp.ClientSession(timeout=timeout) as session:
                async with session.post(self.url, json=self.build_request(parts), headers=headers) as resp:
                    if resp.status >= 400:
                        detail = (await resp.text())[:300]
                        raise GenerationError(f"Gemini API error: {resp.status} {detail}")
                    data = await resp.json(content_type=None)
        except GenerationError:
            raise
        except asyncio.TimeoutError:
            raise GenerationError(f"Timeout ({self.config.timeout_seconds:g}s)")
        except aiohttp.ClientError as e:
            raise GenerationError(f"Gemini request failed: {e}") from e
        except ValueError as e:
            raise GenerationError(f"Gemini returned non-JSON body: {e}") from e

        text = self.extract_text(data)
        print(f"[{datetime.now().isoformat()}] Completed")
        self.usage_tracker.record_call()
        warning = self.usage_tracker.get_warning()
        if warning:
            print(warning)
        return text
