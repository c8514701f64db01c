"""Application configuration from environment variables."""

from __future__ import annotations

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    heraldry_env: str = "development"
    heraldry_log_level: str = "info"

    # CORS
    cors_origins: list[str] = ["http://localhost:3000"]

    # Charge artwork: a base URL wins over a directory; empty dir = bundled samples
    charge_asset_dir: str = ""
    charge_asset_base_url: str = ""

    # Shield outlines: extra *.svg outlines on top of the built-in set
    shield_asset_dir: str = ""
    default_shield: str = "french"

    # Rendered document size in px (longest side)
    output_size: int = 400

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8"}


settings = Settings()
