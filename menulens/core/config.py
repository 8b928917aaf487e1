"""
Configuration management for MenuLens.

Provides centralized, type-safe configuration with environment variable overrides
and sensible defaults for the session components.
"""

from __future__ import annotations

import os
from functools import lru_cache
from pathlib import Path
from typing import Literal

from dotenv import load_dotenv
from pydantic import BaseModel, Field

# Load .env file if it exists (looks in cwd and parent directories)
load_dotenv()

PREFERENCES_KEY = "menulens-preferences"


class ScanConfig(BaseModel):
    """Mock scan timing configuration."""

    latency_seconds: float = Field(
        default=3.0, ge=0.0, description="Simulated analysis latency"
    )


class CameraConfig(BaseModel):
    """Capture device configuration."""

    facing_mode: Literal["environment", "user"] = Field(
        default="environment", description="Preferred camera facing"
    )
    simulated_permission: Literal["granted", "denied", "absent"] = Field(
        default="granted", description="Outcome of the simulated permission prompt"
    )
    simulated_latency_seconds: float = Field(
        default=0.0, ge=0.0, description="Delay before the simulated device answers"
    )


class StorageConfig(BaseModel):
    """Preference storage configuration."""

    backend: Literal["local", "memory"] = Field(default="local", description="Storage backend")
    base_path: Path = Field(
        default_factory=lambda: Path("~/.menulens").expanduser(),
        description="Base path for local storage",
    )
    preferences_key: str = Field(
        default=PREFERENCES_KEY, description="Key the serialized profile is stored under"
    )


class OnboardingConfig(BaseModel):
    """Onboarding wizard configuration."""

    variant: Literal["guided", "intro"] = Field(
        default="guided", description="Which onboarding flow to present"
    )


class Config(BaseModel):
    """Root configuration for MenuLens."""

    project_name: str = Field(default="MenuLens", description="Project identifier")
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = Field(
        default="INFO", description="Logging level"
    )
    log_format: Literal["auto", "console", "json"] = Field(
        default="auto", description="Log rendering; auto picks console on a TTY"
    )
    scan: ScanConfig = Field(default_factory=ScanConfig)
    camera: CameraConfig = Field(default_factory=CameraConfig)
    storage: StorageConfig = Field(default_factory=StorageConfig)
    onboarding: OnboardingConfig = Field(default_factory=OnboardingConfig)

    model_config = {"extra": "ignore"}

    @classmethod
    def from_env(cls) -> Config:
        """Create configuration from environment variables."""
        storage = StorageConfig(backend=os.environ.get("MENULENS_STORAGE", "local"))  # type: ignore
        if os.environ.get("MENULENS_DATA_PATH"):
            storage.base_path = Path(os.environ["MENULENS_DATA_PATH"]).expanduser()

        return cls(
            log_level=os.environ.get("MENULENS_LOG_LEVEL", "INFO"),  # type: ignore
            log_format=os.environ.get("MENULENS_LOG_FORMAT", "auto"),  # type: ignore
            scan=ScanConfig(
                latency_seconds=float(os.environ.get("MENULENS_SCAN_LATENCY", "3.0")),
            ),
            camera=CameraConfig(
                facing_mode=os.environ.get("MENULENS_CAMERA_FACING", "environment"),  # type: ignore
                simulated_permission=os.environ.get("MENULENS_CAMERA_PERMISSION", "granted"),  # type: ignore
            ),
            storage=storage,
            onboarding=OnboardingConfig(
                variant=os.environ.get("MENULENS_ONBOARDING", "guided"),  # type: ignore
            ),
        )


@lru_cache(maxsize=1)
def get_config() -> Config:
    """Get cached configuration instance."""
    return Config.from_env()
