from typing import List, Literal

from pydantic_settings import BaseSettings, SettingsConfigDict

from spendtalk.constants.spend_context import SPEND_ANALYTIX_CONTEXT


class Settings(BaseSettings):
    DATABASE_URL: str = "sqlite:///./data/spend.db"  # mssql+pyodbc://... in production

    OLLAMA_URL: str = "http://localhost:11434/api/chat"
    OLLAMA_MODEL: str = "phi4"
    OLLAMA_TIMEOUT: float = 120.0

    # "rules" = deterministic parser, "llm" = Ollama-backed intent extraction
    INTERPRETER: Literal["rules", "llm"] = "rules"
    BUSINESS_CONTEXT: str = SPEND_ANALYTIX_CONTEXT

    DEFAULT_ROW_LIMIT: int = 100
    MAX_ROW_LIMIT: int = 1000

    LOG_LEVEL: str = "INFO"
    CORS_ORIGINS: List[str] = ["*"]

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")


settings = Settings()
