"""
Configuration settings for the thumbnail caption text-fit engine
"""

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Engine settings"""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="TEXTFIT_",
        extra="ignore",
    )

    # Canvas (YouTube thumbnail, full HD)
    CANVAS_WIDTH: int = 1920
    CANVAS_HEIGHT: int = 1080

    # Font defaults
    DEFAULT_FONT_FAMILY: str = "Impact"
    DEFAULT_FONT_WEIGHT: int = 900
    BOLD_WEIGHT_THRESHOLD: int = 700  # weights at or above this render wider
    BOLD_WIDTH_MULTIPLIER: float = 1.05

    # Auto-fit defaults
    MIN_FONT_SIZE: int = 60
    MAX_FONT_SIZE: int = 280
    MAX_LINES: int = 3
    LINE_HEIGHT_MULTIPLIER: float = 1.1  # standard leading
    STROKE_WIDTH: int = 0
    FIT_MAX_WIDTH: int = 1000  # box used when auto_fit_text gets no constraints
    FIT_MAX_HEIGHT: int = 400

    # Placement
    DEFAULT_POSITION: str = "center"
    SAFE_ZONE_DEVICE: str = "desktop"  # "desktop" or "mobile"
    AVOID_DURATION_ZONE: bool = True  # lift text above the duration badge when possible
    DURATION_ZONE_PADDING: int = 20

    # Logging
    LOG_LEVEL: str = "INFO"


settings = Settings()
