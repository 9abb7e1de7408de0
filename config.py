from enum import Enum

from pydantic_settings import BaseSettings, SettingsConfigDict


class Env(Enum):
    local = "local"
    dev = "dev"
    prod = "prod"


class Config(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    env: Env = Env.local
    db_url: str = "sqlite+aiosqlite:///chefai.db"
    open_router_api_key: str | None = None
    open_router_base_url: str = "https://openrouter.ai/api/v1/"
    llm_model: str = "openai/gpt-3.5-turbo"
    openai_dall_e_api_key: str | None = None
    image_model: str = "dall-e-3"
    request_timeout: float = 60 * 2
    max_recent_recipes: int = 10
    user_id: str = "local-user"
    log_level: str = "INFO"
