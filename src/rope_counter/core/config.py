"""Application configuration via Pydantic Settings."""

from functools import lru_cache
from pathlib import Path
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class RopeDetectionSettings(BaseSettings):
    """Jump-rope detection parameters.

    All distances are expressed as ratios of the current torso height so the
    thresholds follow the subject as they move closer to or away from the camera.
    """

    model_config = SettingsConfigDict(env_prefix="ROPE_")

    min_landmarks: int = Field(default=33, ge=25)
    min_hip_visibility: float = Field(default=0.5, ge=0.0, le=1.0)
    min_torso_height: float = Field(default=1e-3, gt=0.0)
    wrist_history_size: int = Field(default=10, ge=2)
    hand_amplitude_ratio: float = Field(default=0.05, gt=0.0)
    takeoff_ratio: float = Field(default=0.15, gt=0.0)
    landing_ratio: float = Field(default=0.8, gt=0.0, le=1.0)
    ground_band_ratio: float = Field(default=0.5, gt=0.0)
    ground_smoothing: float = Field(default=0.05, gt=0.0, lt=1.0)


class PoseSettings(BaseSettings):
    """MediaPipe pose landmarker settings."""

    model_config = SettingsConfigDict(env_prefix="POSE_", protected_namespaces=())

    model_variant: Literal["lite", "full", "heavy"] = "full"
    min_detection_confidence: float = Field(default=0.5, ge=0.0, le=1.0)
    min_presence_confidence: float = Field(default=0.5, ge=0.0, le=1.0)
    min_tracking_confidence: float = Field(default=0.5, ge=0.0, le=1.0)
    model_dir: Path | None = None


class VideoSettings(BaseSettings):
    """Video source settings."""

    model_config = SettingsConfigDict(env_prefix="VIDEO_")

    source: str = "0"
    fallback_fps: float = Field(default=30.0, gt=0.0)
    max_frames: int | None = Field(default=None, gt=0)


class LoggingSettings(BaseSettings):
    """Logging configuration."""

    model_config = SettingsConfigDict(env_prefix="LOG_")

    level: str = "INFO"
    file: str | None = None


class Settings(BaseSettings):
    """Root settings aggregating all configuration sections."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    rope: RopeDetectionSettings = Field(default_factory=RopeDetectionSettings)
    pose: PoseSettings = Field(default_factory=PoseSettings)
    video: VideoSettings = Field(default_factory=VideoSettings)
    logging: LoggingSettings = Field(default_factory=LoggingSettings)


@lru_cache
def get_settings() -> Settings:
    """Get cached application settings instance."""
    return Settings()
