from functools import lru_cache
from pathlib import Path

from pydantic import Field, SecretStr, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from ._utils import resolve_env_file_path

# Value shipped in sample .env files; treated as "no key configured".
PLACEHOLDER_API_KEY = "your_openai_api_key"


class Settings(BaseSettings):
    """Assistant core configuration."""

    log_level: str = "INFO"

    # Embedding provider. A usable key switches from the hashed
    # bag-of-words encoder to the remote provider.
    embedding_api_key: SecretStr | None = None
    embedding_base_url: str = "https://api.openai.com/v1"
    embedding_model: str = "text-embedding-3-small"
    embedding_dimension: int = Field(default=384, gt=0)
    embedding_timeout: float = Field(default=10.0, gt=0)

    # Vector index backend (SQLAlchemy async URL). Absent means the
    # retrieval engine runs on the keyword scorer only.
    index_database_url: str | None = None
    index_database_echo: bool = False

    # Corpus and categorization inputs
    knowledge_path: Path | None = None
    category_rules_path: Path | None = None

    search_top_k: int = Field(default=3, gt=0)

    model_config = SettingsConfigDict(
        env_file=resolve_env_file_path(),
        env_file_encoding="utf-8",
        env_prefix="FINASSIST_ML_",
        extra="ignore",
    )

    @field_validator("embedding_api_key", mode="before")
    @classmethod
    def drop_placeholder_key(cls, v: object) -> object:
        if v is None:
            return None
        raw = v.get_secret_value() if isinstance(v, SecretStr) else str(v)
        raw = raw.strip()
        if not raw or raw == PLACEHOLDER_API_KEY:
            return None
        return raw

    @field_validator("index_database_url", mode="before")
    @classmethod
    def blank_url_to_none(cls, v: str | None) -> str | None:
        if v is None or not str(v).strip():
            return None
        return str(v).strip()

    @property
    def embeddings_enabled(self) -> bool:
        """True when a real embedding provider is configured."""
        return self.embedding_api_key is not None

    @property
    def index_enabled(self) -> bool:
        """True when a vector index backend is configured."""
        return self.index_database_url is not None


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
