"""Configuration management."""

from pydantic import Field
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application settings."""

    # API
    api_host: str = Field(default="0.0.0.0", description="API host")
    api_port: int = Field(default=8000, description="API port")

    # Generation
    default_map_width: int = Field(default=800, description="Default map width")
    default_map_height: int = Field(default=600, description="Default map height")
    max_map_width: int = Field(default=2000, description="Max allowed map width")
    max_map_height: int = Field(default=2000, description="Max allowed map height")
    default_seed: int = Field(default=42, description="Seed used when a request omits one")
    map_cache_size: int = Field(default=16, description="Generated land masks kept in memory")

    # Logging
    log_level: str = Field(default="INFO", description="Log level")
    log_format: str = Field(default="json", description="Logging format (console or json)")

    class Config:
        env_prefix = "LANDMASS_"
        env_file = ".env"
        extra = "ignore"


settings = Settings()
