"""
Configuration management using Pydantic Settings.

Environment variables:
- DEFAULT_IMAGE_WIDTH / DEFAULT_IMAGE_HEIGHT: Image size before the first page loads
- PDF_RENDER_SCALE: Scale applied to PDF page size when reporting pixel extent
- OUT_OF_RANGE_PAGE_POLICY: ignore | clamp | raise
- OCR_FILE_SUFFIX: Suffix of cached OCR results next to an asset
- LOG_LEVEL: Logging level
"""
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore"
    )

    # Image defaults
    default_image_width: int = Field(default=1024)
    default_image_height: int = Field(default=768)
    pdf_render_scale: float = Field(default=2.0)

    # Page navigation
    out_of_range_page_policy: Literal["ignore", "clamp", "raise"] = Field(default="ignore")

    # OCR
    ocr_file_suffix: str = Field(default=".ocr.json")

    # Logging
    log_level: str = Field(default="INFO")

    def get_default_image_extent(self) -> tuple:
        """Default image extent as (min_x, min_y, max_x, max_y)."""
        return (0, 0, self.default_image_width, self.default_image_height)


# Global settings instance
settings = Settings()
