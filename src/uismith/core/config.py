"""Configuration Management."""

from functools import lru_cache
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict
from dotenv import load_dotenv

# Load environment variables from .env file
load_dotenv()


class Settings(BaseSettings):
    """Pipeline settings from environment."""

    model_config = SettingsConfigDict(
        env_prefix="UISMITH_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",  # Ignore extra environment variables
    )

    # Logging
    log_level: str = Field(default="INFO", description="Log level")
    json_logs: bool = Field(default=False, description="Use JSON log format")

    # Pipeline defaults
    auto_apply_design_improvements: bool = Field(
        default=True, description="Adopt critique improvements when not blocking"
    )
    auto_apply_accessibility_fixes: bool = Field(
        default=True, description="Adopt accessibility auto-fixes"
    )
    skip_design_review: bool = Field(default=False, description="Skip the critique stage")
    skip_accessibility_check: bool = Field(default=False, description="Skip the validation stage")
    export_on_success: bool = Field(default=True, description="Run export after validation")
    stage_timeout: float = Field(default=5.0, gt=0, description="Per-stage time limit (seconds)")

    # Export
    export_format: Literal["react", "json", "tree", "storybook", "full"] = Field(
        default="full", description="Default export format"
    )
    export_framework: Literal["nextjs", "vite", "cra"] = Field(
        default="nextjs", description="Target framework for page code"
    )
    export_typescript: bool = Field(default=True, description="Emit .tsx instead of .jsx")

    # Caching
    enable_export_cache: bool = Field(default=True, description="Memoise export packages")
    export_cache_size: int = Field(default=64, gt=0, description="Export cache max size")

    # Validation
    max_request_length: int = Field(default=2_000, gt=0, description="Max request length")


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
