"""Configuration for Persona Chat."""

from typing import Optional

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Settings shared by the chat server, the live store and the CLI."""

    # Server-side backing store (SQLAlchemy async URL)
    DATABASE_URL: str = "sqlite+aiosqlite:///./data/personachat.db"

    # Where the live store finds the table API and the chat function
    BACKEND_URL: str = "http://localhost:8000"

    # Bearer credentials. When neither key is set the server accepts
    # unauthenticated requests (development only).
    ANON_KEY: Optional[str] = None
    SERVICE_ROLE_KEY: Optional[str] = None

    # Completion provider. No key means canned replies only.
    DEEPSEEK_API_KEY: Optional[str] = None
    DEEPSEEK_API_URL: str = "https://api.deepseek.com/chat/completions"
    DEEPSEEK_MODEL: str = "deepseek-chat"
    COMPLETION_MAX_TOKENS: int = 200
    COMPLETION_TEMPERATURE: float = 0.8
    COMPLETION_TIMEOUT: float = 30.0

    # Timeout for each round trip made by the live store
    HTTP_TIMEOUT: float = 10.0

    # File holding the persisted demo/live toggle
    MODE_FLAG_PATH: str = "~/.personachat/demo_mode"

    LOG_LEVEL: str = "INFO"

    API_HOST: str = "0.0.0.0"
    API_PORT: int = 8000

    class Config:
        env_file = ".env"
        extra = "ignore"


def get_settings() -> Settings:
    """Build settings from the environment."""
    return Settings()
