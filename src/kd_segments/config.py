"""Library configuration."""

from enum import Enum

from pydantic_settings import BaseSettings, SettingsConfigDict

# Fragments narrower than this on the cut axis are not subdivided further.
MIN_FRAGMENT_EXTENT = 10.0


class GeometryErrorPolicy(str, Enum):
    """What the engine does when a split raises GeometryError."""

    ABORT = "abort"
    SKIP = "skip"


class Settings(BaseSettings):
    """Settings loaded from environment variables (``KD_SEGMENTS_*``)."""

    model_config = SettingsConfigDict(
        env_prefix="KD_SEGMENTS_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Oracle
    min_fragment_extent: float = MIN_FRAGMENT_EXTENT

    # Engine
    max_tree_depth: int = 32
    on_geometry_error: GeometryErrorPolicy = GeometryErrorPolicy.ABORT

    # Logging
    log_level: str = "info"

    # Demo scene
    demo_segments: int = 64
    demo_seed: int = 42
    demo_extent: float = 640.0


settings = Settings()
