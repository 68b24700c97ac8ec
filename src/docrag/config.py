"""Application configuration from environment variables."""

from functools import lru_cache
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from docrag.domain.value_objects import ChunkingStrategy


class Settings(BaseSettings):
    """Application settings loaded from environment."""

    model_config = SettingsConfigDict(
        env_prefix="DOCRAG_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )

    # Embedding API (OpenAI compatible)
    embedding_backend: Literal["openai", "hashing"] = Field(
        default="openai",
        description="Embedding adapter: OpenAI-compatible API or offline hashing",
    )
    embedding_api_url: str = Field(
        default="https://api.openai.com/v1",
        description="OpenAI-compatible embedding API URL",
    )
    embedding_api_key: str = Field(default="", description="Embedding API key")
    embedding_model: str = Field(
        default="text-embedding-3-small",
        description="Embedding model name",
    )
    embedding_dimensions: int | None = Field(
        default=None,
        gt=0,
        description="Requested vector size; None keeps the model default",
    )
    embedding_timeout: float | None = Field(
        default=30.0,
        gt=0,
        description="Deadline in seconds per embedding request and per retrieval",
    )
    embedding_max_retries: int = Field(default=2, ge=0, description="Client-side retries")

    # Retrieval defaults (per-request values override)
    max_documents: int = Field(default=10, gt=0, description="Documents allowed per query")
    default_top_k: int | None = Field(default=None, gt=0, description="Override preset top_k")
    default_similarity_threshold: float | None = Field(
        default=None, ge=-1.0, le=1.0, description="Override preset threshold"
    )
    default_chunk_size: int | None = Field(
        default=None, gt=0, description="Override preset chunk size"
    )
    default_chunk_strategy: ChunkingStrategy = Field(
        default=ChunkingStrategy.SENTENCE, description="Chunking strategy"
    )

    # HTTP
    host: str = Field(default="0.0.0.0", description="Bind host")
    port: int = Field(default=8000, description="Bind port")
    cors_origins: str = Field(default="", description="Comma-separated allowed origins")

    # Application
    environment: Literal["development", "staging", "production"] = Field(
        default="development",
        description="Environment name",
    )
    log_level: str = Field(default="INFO", description="Logging level")
    log_json: bool = Field(default=True, description="Render logs as JSON lines")

    def retrieval_overrides(self) -> dict[str, object]:
        """Configured defaults that replace preset values."""
        overrides: dict[str, object] = {
            "max_documents": self.max_documents,
            "chunk_strategy": self.default_chunk_strategy,
        }
        if self.default_top_k is not None:
            overrides["top_k"] = self.default_top_k
        if self.default_similarity_threshold is not None:
            overrides["similarity_threshold"] = self.default_similarity_threshold
        if self.default_chunk_size is not None:
            overrides["chunk_size"] = self.default_chunk_size
        return overrides


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
