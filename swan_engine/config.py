"""Application configuration loaded from environment variables."""

from __future__ import annotations

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    app_name: str = "swan-engine"
    debug: bool = False
    log_level: str = "INFO"

    # Centrality propagation
    centrality_iterations: int = 5
    centrality_damping: float = 0.85

    # Narrative clustering
    cluster_window_minutes: int = 60
    clustering_strategy: str = "greedy"

    # Martingale accumulation
    martingale_decay: float = 0.95

    # Correlation placeholder fill; None draws a fresh seed per process
    correlation_seed: int | None = None

    # Optional report phrasing
    gemini_model: str = "gemini-2.0-flash"
    gemini_temperature: float = 0.2
    gemini_max_output_tokens: int = 1024

    model_config = {"env_prefix": "SWAN_"}


settings = Settings()
