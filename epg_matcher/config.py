from pathlib import Path
from typing import Annotated
import logging

from pydantic import field_validator, model_validator
from pydantic_settings import BaseSettings, NoDecode, SettingsConfigDict

from epg_matcher.utils.logging_helpers import LOG_DATE_FORMAT, LOG_FORMAT


logger = logging.getLogger(__name__)

_LOG_LEVELS = {"CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG"}


class CustomSettings(BaseSettings):
    """Application settings loaded from environment variables.

    Defaults reproduce the fixed French playlist setup; validation runs at
    startup so misconfiguration fails before any download.
    """

    playlist_url: str = "https://iptv-org.github.io/iptv/countries/fr.m3u"
    epg_path: str = "fr_epg.xml"
    corrected_playlist_path: str = "fr_corrected.m3u"
    clean_playlist_path: str = "fr_clean.m3u"
    match_threshold: float = 0.6  # Exclusive lower bound for fuzzy scores
    unresolved_output_limit: int = 10  # Unresolved entries written to the clean playlist
    unresolved_report_limit: int = 15  # Unresolved channels listed in the summary
    unresolved_report_exclude: Annotated[list[str], NoDecode] = ["Pluto TV"]
    fetch_timeout_sec: float = 30.0  # 0 disables timeout
    log_level: str = "INFO"

    model_config = SettingsConfigDict(
        case_sensitive=False,
        extra="ignore",
    )

    @field_validator("unresolved_report_exclude", mode="before")
    @classmethod
    def parse_report_exclude(cls, value):
        """Parse comma-separated substrings or list."""
        if isinstance(value, str):
            if not value.strip():
                return []
            return [item.strip() for item in value.split(",") if item.strip()]
        if isinstance(value, list):
            return value
        return []

    @field_validator("playlist_url")
    @classmethod
    def validate_playlist_url(cls, value: str) -> str:
        """Validate playlist URL is HTTP/HTTPS."""
        if not value.lower().startswith(("http://", "https://")):
            raise ValueError(f"Playlist URL must be HTTP/HTTPS: {value}")
        return value

    @field_validator("epg_path")
    @classmethod
    def validate_epg_path(cls, value: str) -> str:
        """Ensure the EPG path is set."""
        if not value.strip():
            raise ValueError("epg_path must not be empty")
        return value

    @field_validator("corrected_playlist_path", "clean_playlist_path")
    @classmethod
    def validate_output_path(cls, value: str, info) -> str:
        """Validate output path is accessible."""
        if not value.strip():
            raise ValueError(f"{info.field_name} must not be empty")
        path = Path(value)
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            return value
        except (OSError, PermissionError) as exc:
            raise ValueError(f"Cannot access output path '{value}': {exc}") from exc

    @field_validator("match_threshold")
    @classmethod
    def validate_threshold(cls, value: float) -> float:
        """Validate threshold lies in [0, 1)."""
        if not 0 <= value < 1:
            raise ValueError("match_threshold must be >= 0 and < 1")
        return value

    @field_validator("unresolved_output_limit", "unresolved_report_limit")
    @classmethod
    def validate_limits(cls, value: int, info) -> int:
        """Ensure limits are non-negative."""
        if value < 0:
            raise ValueError(f"{info.field_name} must be >= 0")
        return value

    @field_validator("fetch_timeout_sec")
    @classmethod
    def validate_fetch_timeout(cls, value: float) -> float:
        """Validate HTTP timeout (seconds)."""
        if value < 0:
            raise ValueError("fetch_timeout_sec must be >= 0")
        return value

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, value: str) -> str:
        """Validate logging level name."""
        normalized = value.upper()
        if normalized not in _LOG_LEVELS:
            raise ValueError(f"log_level must be one of {sorted(_LOG_LEVELS)}")
        return normalized

    @model_validator(mode="after")
    def validate_paths(self):
        """Validate that inputs and outputs do not overwrite each other."""
        corrected = Path(self.corrected_playlist_path).resolve()
        clean = Path(self.clean_playlist_path).resolve()
        epg = Path(self.epg_path).resolve()

        if corrected == clean:
            raise ValueError("corrected_playlist_path and clean_playlist_path must differ")
        if epg in (corrected, clean):
            raise ValueError("Output playlists must not overwrite the EPG file")

        return self

    def log_configuration(self) -> None:
        """Log the effective configuration."""
        logger.info("Configuration loaded:")
        logger.info("  Playlist URL: %s", self.playlist_url)
        logger.info("  EPG File: %s", self.epg_path)
        logger.info("  Corrected Playlist: %s", self.corrected_playlist_path)
        logger.info("  Clean Playlist: %s", self.clean_playlist_path)
        logger.info("  Match Threshold: %s", self.match_threshold)
        logger.info("  Unresolved Output Limit: %s", self.unresolved_output_limit)
        logger.info("  Unresolved Report Limit: %s", self.unresolved_report_limit)
        logger.info(
            "  Fetch Timeout: %s",
            f"{self.fetch_timeout_sec}s" if self.fetch_timeout_sec else "disabled",
        )


settings = CustomSettings()


def setup_logging() -> None:
    """Configure application logging and report the loaded settings."""
    logging.basicConfig(
        level=getattr(logging, settings.log_level),
        format=LOG_FORMAT,
        datefmt=LOG_DATE_FORMAT,
    )
    settings.log_configuration()
