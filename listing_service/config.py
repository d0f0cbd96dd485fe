import os
from dataclasses import dataclass
from functools import lru_cache

from dotenv import load_dotenv

# .env file from the project root (if present)
load_dotenv()


def _env_flag(name: str, default: str = "0") -> bool:
    return os.getenv(name, default).strip().lower() in ("1", "true", "yes", "on")


@dataclass(frozen=True)
class Settings:
    # Server
    AI_SERVICE_HOST: str = "0.0.0.0"
    AI_SERVICE_PORT: int = 8000
    LOG_LEVEL: str = "info"
    DEBUG: bool = False

    # Completion API (OpenAI compatible)
    OPENAI_API_KEY: str = ""
    OPENAI_BASE_URL: str = "https://api.openai.com/v1"
    OPENAI_MODEL: str = "gpt-4o-mini"
    LLM_TEMPERATURE: float = 0.7
    LLM_MAX_TOKENS: int = 500
    REQUEST_TIMEOUT_SEC: float = 30.0

    # Browser clients
    CORS_ALLOW_ORIGIN: str = "*"

    @classmethod
    def from_env(cls) -> "Settings":
        return cls(
            AI_SERVICE_HOST=os.getenv("AI_SERVICE_HOST", "0.0.0.0"),
            AI_SERVICE_PORT=int(os.getenv("AI_SERVICE_PORT", "8000")),
            LOG_LEVEL=os.getenv("LOG_LEVEL", "info"),
            DEBUG=_env_flag("DEBUG"),
            OPENAI_API_KEY=os.getenv("OPENAI_API_KEY", "").strip(),
            OPENAI_BASE_URL=os.getenv("OPENAI_BASE_URL", "https://api.openai.com/v1").rstrip("/"),
            OPENAI_MODEL=os.getenv("OPENAI_MODEL", "gpt-4o-mini"),
            LLM_TEMPERATURE=float(os.getenv("LLM_TEMPERATURE", "0.7")),
            LLM_MAX_TOKENS=int(os.getenv("LLM_MAX_TOKENS", "500")),
            REQUEST_TIMEOUT_SEC=float(os.getenv("REQUEST_TIMEOUT_SEC", "30")),
            CORS_ALLOW_ORIGIN=os.getenv("CORS_ALLOW_ORIGIN", "*"),
        )


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings.from_env()
