"""Notes client configuration loaded from environment variables."""

from __future__ import annotations

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application settings loaded from .env file."""

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8"}

    # Remote notes API
    notes_api_url: str = "http://localhost:3000"
    request_timeout: float = 10.0

    # Page features
    enable_search: bool = True
    enable_sort: bool = True

    # Reminders
    reminder_title: str = "¡Recordatorio de Nota!"
    reminder_body: str = "Es hora de revisar tu nota: {title}"

    # Display
    date_locale: str = "es-MX"
    log_level: str = "INFO"

    # Prometheus exposition; 0 disables the metrics server
    metrics_port: int = 9100


settings = Settings()
