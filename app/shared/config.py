# app/shared/config.py
from pydantic import BaseModel, ConfigDict
from dotenv import load_dotenv
import os

load_dotenv()

class Settings(BaseModel):
    ENV: str = os.getenv("ENV", "dev")
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")

    # None -> SQLite file under ./storage (see app/shared/db.py)
    DATABASE_URL: str | None = os.getenv("DATABASE_URL")

    # Gemini summarizer
    GEMINI_API_KEY: str | None = os.getenv("GEMINI_API_KEY")
    GEMINI_MODEL: str = os.getenv("GEMINI_MODEL", "gemini-2.0-flash-001")

settings = Settings()


class SummarizerConfig(BaseModel):
    """Everything the summarization workflow needs, fixed at construction.

    Sampling defaults keep the output short and close to deterministic:
    the summary should read like an extraction of the memo, not a rewrite.
    """
    model_config = ConfigDict(frozen=True)

    api_key: str | None = None
    model: str = "gemini-2.0-flash-001"
    max_output_tokens: int = 500
    temperature: float = 0.3
    top_p: float = 0.9
    top_k: int = 40

    @classmethod
    def from_settings(cls, s: Settings | None = None) -> "SummarizerConfig":
        s = s or settings
        return cls(api_key=s.GEMINI_API_KEY or None, model=s.GEMINI_MODEL)

    @property
    def configured(self) -> bool:
        return bool(self.api_key)
