"""
Application settings
"""

from typing import List, Optional
from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import Field


class Settings(BaseSettings):
    """Application settings"""

    app_name: str = Field(default="MeroBudget")
    debug: bool = Field(default=False)
    log_level: str = Field(default="INFO")
    log_dir: str = Field(default="logs")
    log_file: Optional[str] = Field(default="budget.log", description="Empty disables the file sink")
    log_rotation: str = Field(default="1 day")
    log_retention: str = Field(default="30 days")
    error_log_file: Optional[str] = Field(default="errors.log", description="Empty disables the error sink")
    log_colorize: bool = Field(default=True)
    log_intercept: List[str] = Field(default=["uvicorn", "uvicorn.access", "fastapi", "httpx", "sqlalchemy.engine"])

    ai_api_key: Optional[str] = Field(default=None, description="Chat-completion API key (Groq)")
    ai_base_url: str = Field(default="https://api.groq.com/openai/v1")
    ai_model: str = Field(default="llama-3.3-70b-versatile")
    ai_timeout_seconds: float = Field(default=30.0, gt=0)
    ai_max_retries: int = Field(default=3, ge=1)
    ai_backoff_base: float = Field(default=1.0, ge=0, description="Exponential backoff base in seconds")
    app_url: str = Field(default="http://localhost:3000", description="Sent as HTTP-Referer")

    database_url: str = Field(default="sqlite:///./budget.db")

    currency_code: str = Field(default="NPR")
    currency_symbol: str = Field(default="रू")
    region_name: str = Field(default="Nepal")

    insight_sample_size: int = Field(default=10, ge=1, description="Records embedded in the insights prompt")
    recent_records_limit: int = Field(default=20, ge=1)

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    @property
    def ai_configured(self) -> bool:
        return bool(self.ai_api_key and self.ai_api_key.strip())


@lru_cache()
def get_settings() -> Settings:
    """Get settings (cached)"""
    return Settings()
