from __future__ import annotations

import os
from functools import lru_cache

from dotenv import load_dotenv


load_dotenv()


class Settings:
    """Application settings loaded from environment variables.

    The inference backend address and model are fixed; only the HTTP
    surface is configurable.
    """

    host: str = os.getenv("HOST", "0.0.0.0")
    port: int = int(os.getenv("PORT", "5000"))
    log_level: str = os.getenv("LOG_LEVEL", "INFO").upper()
    ollama_base_url: str = "http://localhost:11434"
    ollama_model: str = "llama3.2:1b"


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings()
