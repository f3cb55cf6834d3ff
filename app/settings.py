import os
from pydantic import BaseModel
from functools import lru_cache
from dotenv import load_dotenv
load_dotenv()

class Settings(BaseModel):
    APP_NAME: str = os.getenv("APP_NAME", "AI CV Ranking & Generation")
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")
    PORT: int = int(os.getenv("PORT", "3001"))
    UPLOAD_DIR: str = os.getenv("UPLOAD_DIR", "uploads")
    STATIC_DIR: str = os.getenv("STATIC_DIR", "client/build")
    CORS_ORIGINS: str = os.getenv("CORS_ORIGINS", "*")
    MAX_CV_FILES: int = int(os.getenv("MAX_CV_FILES", "10"))
    MAX_GENERATED_CVS: int = int(os.getenv("MAX_GENERATED_CVS", "10"))
    OPENAI_API_KEY: str | None = os.getenv("OPENAI_API_KEY") or None
    OPENAI_MODEL: str = os.getenv("OPENAI_MODEL", "gpt-3.5-turbo")
    OPENROUTER_API_KEY: str | None = os.getenv("OPENROUTER_API_KEY") or None
    OPENROUTER_MODEL: str = os.getenv("OPENROUTER_MODEL", "openai/gpt-3.5-turbo")
    LLM_TIMEOUT_SECONDS: float = float(os.getenv("LLM_TIMEOUT_SECONDS", "60"))
    LLM_MAX_ATTEMPTS: int = int(os.getenv("LLM_MAX_ATTEMPTS", "3"))
    LLM_BACKOFF_SECONDS: float = float(os.getenv("LLM_BACKOFF_SECONDS", "1.0"))
    RANK_TEMPERATURE: float = float(os.getenv("RANK_TEMPERATURE", "0.3"))
    GENERATE_TEMPERATURE: float = float(os.getenv("GENERATE_TEMPERATURE", "0.7"))
    PDF_MAX_CONCURRENCY: int = int(os.getenv("PDF_MAX_CONCURRENCY", "2"))
    PDF_TIMEOUT_SECONDS: float = float(os.getenv("PDF_TIMEOUT_SECONDS", "30"))

    @property
    def cors_origins(self) -> list[str]:
        return [o.strip() for o in self.CORS_ORIGINS.split(",") if o.strip()]

@lru_cache
def get_settings() -> Settings:
    return Settings()

settings = get_settings()
