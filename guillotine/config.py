from pathlib import Path
from typing import Literal, Optional
from pydantic import BaseModel, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class GuillotineConfig(BaseModel):
    """Configuration for recursive splitting."""

    threshold: float = Field(default=30.0, ge=0.0, description="Minimum discontinuity score required to accept a cut")
    min_size: int = Field(default=100, ge=2, description="Minimum width and height of a region that is kept and cut further")
    parallel_depth: int = Field(default=4, ge=0, description="Recursion levels whose halves are split concurrently (0 = sequential)")


class ExportConfig(BaseModel):
    """Configuration for writing split results."""

    image_format: Literal["png", "jpg", "bmp", "tiff"] = Field(default="png", description="Output file format")
    output_dir: Optional[Path] = Field(
        default=None, description="Parent directory for outputs (None = next to the source image)"
    )


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="GUILLOTINE_",
        env_nested_delimiter="__",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    debug: bool = False

    # Input limits
    max_file_size_mb: int = 200

    splitting: GuillotineConfig = GuillotineConfig()
    export: ExportConfig = ExportConfig()


settings = Settings()


def get_settings() -> Settings:
    """Get the global settings instance."""
    return settings
