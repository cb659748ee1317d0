"""Configuration management using Pydantic Settings."""

from functools import lru_cache
from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="BLOG_CATALOG_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Directory holding blogs.json, categories.json, tags.json and authors.json
    data_dir: Path = Path("./data")

    # Catalogue page size
    page_size: int = Field(default=6, ge=1)

    log_level: str = "INFO"

    @property
    def blogs_file(self) -> Path:
        return self.data_dir / "blogs.json"

    @property
    def categories_file(self) -> Path:
        return self.data_dir / "categories.json"

    @property
    def tags_file(self) -> Path:
        return self.data_dir / "tags.json"

    @property
    def authors_file(self) -> Path:
        return self.data_dir / "authors.json"


@lru_cache
def get_settings() -> Settings:
    """Return the process-wide settings instance."""
    return Settings()
