from pathlib import Path
from typing import Literal

from pydantic_settings import BaseSettings, SettingsConfigDict

FIXTURES_DIR = Path(__file__).parent.parent / "catalog" / "fixtures"


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    # Keys must be provided via env / .env (never hardcode secrets in code)
    groq_api_key: str | None = None
    analysis_backend: Literal["auto", "llm", "heuristic"] = "auto"
    analysis_model: str = "llama-3.3-70b-versatile"
    analysis_base_url: str = "https://api.groq.com/openai/v1"
    analysis_temperature: float = 0.3
    analysis_max_tokens: int = 3000
    assistant_temperature: float = 0.2

    request_timeout: float = 30.0
    llm_max_retries: int = 3
    llm_initial_delay: float = 1.0
    llm_max_delay: float = 30.0

    # Dataset refs may be filesystem paths or http(s) URLs
    delivery_dataset: str = str(FIXTURES_DIR / "quickdelivery.json")
    rides_dataset: str = str(FIXTURES_DIR / "ridedata.json")
    ecommerce_dataset: str = str(FIXTURES_DIR / "ecomdata.json")

    suggestion_min_chars: int = 2
    suggestion_limit: int | None = None  # None = unbounded

    # Credential accepted by the in-memory session provider (development only)
    demo_credential: str | None = None

    log_level: str = "INFO"


settings = Settings()  # load once at import
