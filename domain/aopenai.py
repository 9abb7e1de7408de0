import httpx
import openai

from config import Config


MAX_TOKENS = 1024
TEMPERATURE = 0.7
TOP_P = 0.95


def open_router_client_factory(config: Config) -> httpx.AsyncClient:
    return httpx.AsyncClient(
        base_url=config.open_router_base_url,
        headers={
            "Authorization": f"Bearer {config.open_router_api_key or ''}",
            "Content-Type": "application/json",
            "HTTP-Referer": "chefai-app",
            "X-Title": "ChefAI",
        },
        timeout=config.request_timeout,
    )


def openai_client_factory(config: Config) -> openai.AsyncClient | None:
    """Images client, None when there is no key to create one with."""
    if not config.openai_dall_e_api_key:
        return None
    return openai.AsyncClient(
        api_key=config.openai_dall_e_api_key,
        timeout=config.request_timeout,
        max_retries=0,
    )
