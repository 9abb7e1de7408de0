import logging
from typing import Any

import httpx
import openai

from config import Config
from domain.aopenai import (
    MAX_TOKENS,
    TEMPERATURE,
    TOP_P,
    open_router_client_factory,
    openai_client_factory,
)
from domain.prompts import image_prompt


logger = logging.getLogger(__name__)


class MissingApiKey(Exception):
    pass


class LLMService:
    """Talks to the completions api (OpenRouter) and the images api (OpenAI)."""

    def __init__(
        self,
        config: Config | None = None,
        http_client: httpx.AsyncClient | None = None,
        openai_client: openai.AsyncClient | None = None,
    ) -> None:
        self.config = Config() if config is None else config
        self.http_client = (
            open_router_client_factory(self.config)
            if http_client is None
            else http_client
        )
        self.openai_client = (
            openai_client_factory(self.config)
            if openai_client is None
            else openai_client
        )

    def payload(self, prompt: str) -> dict[str, Any]:
        return {
            "model": self.config.llm_model,
            "messages": [{"role": "user", "content": prompt}],
            "temperature": TEMPERATURE,
            "max_tokens": MAX_TOKENS,
            "top_p": TOP_P,
        }

    async def complete(self, prompt: str) -> str:
        """Completion text for a single user message.

        A non-2xx response gives an empty string. Transport errors propagate.
        """
        if not self.config.open_router_api_key:
            logger.warning("OpenRouter API key not configured.")
            raise MissingApiKey("open_router_api_key")

        logger.info("Requesting completion from %s", self.config.llm_model)
        resp = await self.http_client.post("chat/completions", json=self.payload(prompt))
        if not resp.is_success:
            logger.error("Completion request failed with status %s", resp.status_code)
            return ""

        data = resp.json()
        logger.info("Received completion. usage=%s", data.get("usage"))
        return data["choices"][0]["message"]["content"] or ""

    async def generate_image(
        self,
        ingredients: list[str],
        dish_type: str | None = None,
    ) -> str | None:
        """URL of a generated picture of the dish, None on any failure."""
        if self.openai_client is None:
            logger.warning("OpenAI DALL-E API key not configured.")
            return None

        prompt = image_prompt(ingredients, dish_type)
        logger.info("Requesting image: %s", prompt)
        try:
            resp = await self.openai_client.images.generate(
                model=self.config.image_model,
                prompt=prompt,
                n=1,
                size="1024x1024",
                quality="standard",
                response_format="url",
            )
        except (openai.OpenAIError, ValueError) as e:
            logger.error("Image request failed. %r", e)
            return None

        # Unvalidated response models, fields may be missing altogether.
        images = getattr(resp, "data", None)
        url = getattr(images[0], "url", None) if images else None
        if not url:
            logger.error("Image response did not contain a url. %r", resp)
            return None

        return url

    async def close(self) -> None:
        await self.http_client.aclose()
        if self.openai_client is not None:
            await self.openai_client.close()
