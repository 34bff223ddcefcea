from pathlib import Path
from typing import List, Optional, Union
from pydantic import BaseModel, Field, SecretStr, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

PACKAGE_DIR = Path(__file__).resolve().parent.parent
DEFAULT_SEED_FILE = PACKAGE_DIR / "db" / "seeds" / "students_seed.json"


class ChatSettings(BaseModel):
    """Everything the chat proxy needs to reach the upstream completion API."""

    api_key: Optional[SecretStr] = None
    base_url: str = "https://api.groq.com/openai/v1"
    model: str = "llama-3.3-70b-versatile"
    temperature: float = 0.2
    timeout_seconds: float = Field(default=15.0, gt=0)

    @property
    def is_configured(self) -> bool:
        return bool(self.api_key and self.api_key.get_secret_value().strip())


class Settings(BaseSettings):
    # Application
    ENVIRONMENT: str = "development"
    NAME: str = "SIMS"
    VERSION: str = "1.0.0"
    HOST: str = "0.0.0.0"
    PORT: int = 3000
    """Pydantic v2 doesn't support parsing List[str] from a plain comma-separated string by default anymore."""
    ALLOWED_HOSTS: Union[str, List[str]] = "http://127.0.0.1:5500,http://localhost:3000"
    LOG_LEVEL: str = "INFO"
    LOGGING_CONFIG: Optional[Path] = None

    # Student data
    DATA_DIR: Path = Path("data")
    SEED_FILE: Path = DEFAULT_SEED_FILE
    RESEED_WHEN_EMPTY: bool = True

    # Groq (OpenAI-compatible chat completions)
    GROQ_API_KEY: str = ""
    LLM_BASE_URL: str = "https://api.groq.com/openai/v1"
    LLM_MODEL: str = "llama-3.3-70b-versatile"
    LLM_TEMPERATURE: float = 0.2
    LLM_TIMEOUT_SECONDS: float = 15.0

    @field_validator("ALLOWED_HOSTS", mode="before")
    def assemble_cors_origins(cls, v: Union[str, List[str]]) -> Union[List[str], str]:
        if not v:
            return []
        if isinstance(v, str) and not v.startswith("["):
            return [i.strip() for i in v.split(",") if i.strip()]
        return v

    @property
    def DATA_FILE(self) -> Path:
        return self.DATA_DIR / "students.json"

    def chat_settings(self) -> ChatSettings:
        return ChatSettings(
            api_key=SecretStr(self.GROQ_API_KEY) if self.GROQ_API_KEY else None,
            base_url=self.LLM_BASE_URL,
            model=self.LLM_MODEL,
            temperature=self.LLM_TEMPERATURE,
            timeout_seconds=self.LLM_TIMEOUT_SECONDS,
        )

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore",
    )


settings = Settings()
