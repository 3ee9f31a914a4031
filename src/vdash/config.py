"""Configuration management for vdash."""

from pathlib import Path
from typing import Literal

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="VDASH_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )

    # Server
    host: str = "127.0.0.1"
    port: int = 8000
    debug: bool = False
    log_level: str = "INFO"

    # Directories
    data_dir: Path = Path("./data")
    backup_dir: Path = Path("./backups")

    # Persistence
    state_file_name: str = "video-dashboard-data.json"
    save_debounce_seconds: float = 1.0

    # Subtitles
    subtitle_max_chunk_length: int = 500
    subtitle_block_seconds: int = 30

    # Appearance
    default_theme: Literal["light", "dark"] = "dark"

    @property
    def state_path(self) -> Path:
        """Path of the persisted state document."""
        return self.data_dir / self.state_file_name

    def ensure_directories(self) -> None:
        """Create required directories if they don't exist."""
        self.data_dir.mkdir(parents=True, exist_ok=True)
        self.backup_dir.mkdir(parents=True, exist_ok=True)


# Global settings instance
settings = Settings()
