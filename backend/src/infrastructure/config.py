"""
SplatStream configuration using Pydantic Settings.
Every section can be overridden through environment variables or ``.env``.
"""

from __future__ import annotations

from dotenv import load_dotenv
from pydantic import BaseModel, Field
from pydantic_settings import BaseSettings

# Load .env before any BaseSettings subclass reads env vars
load_dotenv()

DEFAULT_STREAMS = [
    "0.mp4", "1.mp4", "2.mp4", "3.mp4", "4.mp4", "5.mp4",
    "9.mp4", "10.mp4", "11.mp4", "12.mp4", "13.mp4", "14.mp4",
    "15.mp4", "16.mp4", "17.mp4", "18.mp4", "19.mp4",
]


class FrameExtractionSettings(BaseSettings):
    frame_rate: int = 25
    color_mode: str = "bgr"
    max_frames: int = 0
    jpeg_quality: int = 95

    model_config = {"env_prefix": "FRAME_EXTRACTION_"}


class SourceSettings(BaseSettings):
    download_dir: str = "./media/downloads"
    timeout: float = 60.0
    max_retries: int = 3
    initial_backoff: float = 1.0
    chunk_size: int = 1024 * 1024
    keep_downloads: bool = False

    model_config = {"env_prefix": "SOURCE_"}


class DatasetSettings(BaseModel):
    video_root: str
    minmax_path: str
    group_info_path: str


def _default_datasets() -> dict[str, DatasetSettings]:
    return {
        "coser": DatasetSettings(
            video_root="./data/coser18_qp0_new",
            minmax_path="./data/viewer_min_max.json",
            group_info_path="./data/group_info.json",
        ),
        "boxing": DatasetSettings(
            video_root="./data/ykx_boxing_long_qp15_380",
            minmax_path="./data/viewer_min_max_ykx_380.json",
            group_info_path="./data/group_info_ykx_380.json",
        ),
    }


class SplatSettings(BaseSettings):
    streams: list[str] = Field(default_factory=lambda: list(DEFAULT_STREAMS))
    frame_rate: int = 25
    decode_concurrency: int = 4
    cache_groups: int = 1
    default_dataset: str = "coser"
    datasets: dict[str, DatasetSettings] = Field(default_factory=_default_datasets)

    model_config = {"env_prefix": "SPLAT_"}


class StorageSettings(BaseSettings):
    media_root: str = "./media"
    frames_dir: str = "./media/frames"
    exports_dir: str = "./media/exports"

    model_config = {"env_prefix": "STORAGE_"}


class WebSettings(BaseSettings):
    host: str = "0.0.0.0"
    port: int = 8000
    api_key: str = ""
    allowed_origins: list[str] = Field(default_factory=lambda: ["*"])

    model_config = {"env_prefix": "WEB_"}


class LoggingSettings(BaseSettings):
    level: str = "INFO"
    file: str = ""

    model_config = {"env_prefix": "LOG_"}


class Settings(BaseSettings):
    """Root settings aggregating all configuration sections."""

    app_env: str = "development"

    frame_extraction: FrameExtractionSettings = Field(default_factory=FrameExtractionSettings)
    source: SourceSettings = Field(default_factory=SourceSettings)
    splat: SplatSettings = Field(default_factory=SplatSettings)
    storage: StorageSettings = Field(default_factory=StorageSettings)

    # Web server
    web: WebSettings = Field(default_factory=WebSettings)
    logging: LoggingSettings = Field(default_factory=LoggingSettings)

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8", "extra": "ignore"}

    def validate_production(self) -> None:
        """Validate critical settings for production environment."""
        if self.app_env == "production" and not self.web.api_key:
            raise RuntimeError(
                "FATAL: an API key is required in production. "
                "Set the WEB_API_KEY environment variable."
            )
        if self.splat.default_dataset not in self.splat.datasets:
            raise RuntimeError(
                f"Default dataset '{self.splat.default_dataset}' is not configured"
            )

    def to_adapter_config(self) -> dict:
        """Flatten settings into the plain dict the adapters consume."""
        return {
            "frame_extraction": self.frame_extraction.model_dump(),
            "source": self.source.model_dump(),
            "splat": {
                "streams": list(self.splat.streams),
                "frame_rate": self.splat.frame_rate,
                "decode_concurrency": self.splat.decode_concurrency,
                "cache_groups": self.splat.cache_groups,
                "default_dataset": self.splat.default_dataset,
                "datasets": {
                    name: ds.model_dump() for name, ds in self.splat.datasets.items()
                },
            },
            "storage": self.storage.model_dump(),
            "web": {"host": self.web.host, "port": self.web.port},
            "logging": {"level": self.logging.level, "file": self.logging.file},
        }


def get_settings() -> Settings:
    """Create and return application settings."""
    return Settings()
