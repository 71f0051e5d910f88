"""
Configuration management for the 31-EDO scale engine.
Loads settings from environment variables.
"""

from typing import Literal
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Engine settings loaded from environment variables."""
    
    # Output
    output_dir: str = "data/scales"
    write_chords: bool = False
    
    # Step bounds
    heptatonic_min_step: int = 2
    min_step: int = 3
    max_step: int = 7
    
    # Flattening search
    flatten_passes: int = 5
    stop_on_duplicate: bool = True
    
    # Recursive exploration
    exploration_max_depth: int = 12
    exploration_max_scales: int = 1500
    cardinality_max_depth: int = 10
    
    # Logging
    log_level: str = "INFO"
    log_format: Literal["json", "console"] = "console"
    
    model_config = SettingsConfigDict(
        env_prefix="EDO31_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore"
    )


# Global settings instance
settings = Settings()


def get_settings() -> Settings:
    """Get settings instance."""
    return settings
