"""Application configuration from environment variables."""

from __future__ import annotations

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    coimap_env: str = "development"
    coimap_log_level: str = "debug"

    # CORS
    cors_origins: list[str] = ["http://localhost:3000"]

    # Cluster + pattern sources
    source_base_url: str = "http://localhost:8888"
    use_local_clusters: bool = True
    local_cluster_url: str = "/assets/sample_module.json"
    remote_cluster_url: str = "/.netlify/functions/moduleRead?module={place_id}&state={state}&page=1"
    pattern_catalog_url: str = "/assets/patterns/patterns.json"
    http_timeout_s: float = 30.0

    # Feature property holding the unit identifier in the vector tiles
    unit_id_property: str = "GEOID20"

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8"}


settings = Settings()
