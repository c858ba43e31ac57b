"""Application settings loader from YAML configuration."""
import os
import yaml
from pathlib import Path
from typing import Optional
from dataclasses import dataclass

DEFAULT_SETTINGS_PATH = Path(__file__).parent / "default_settings.yaml"


@dataclass
class AppSettings:
    """Application-wide settings loaded from a settings YAML file."""

    # App info
    app_name: str
    app_version: str

    # Logging
    log_level: str
    log_max_file_size_mb: int
    log_backup_count: int
    logs_dir: str
    log_file: str

    # LLM
    llm_model_name: str
    llm_model_provider: str
    llm_temperature: float

    # Insights
    insights_max_records: int
    insights_count: int

    # Service
    service_host: str
    service_port: int

    # Client
    client_base_url: str
    client_timeout_seconds: Optional[float]

    # Paths
    config_dir: str
    config_file: str

    @classmethod
    def load(cls, config_path: Path = None) -> "AppSettings":
        """Load settings from YAML file."""
        if config_path is None:
            env_path = os.getenv("SPENDWISE_SETTINGS")
            config_path = Path(env_path) if env_path else DEFAULT_SETTINGS_PATH

        if not config_path.exists():
            raise FileNotFoundError(f"Settings file not found: {config_path}")

        with open(config_path, "r", encoding="utf-8") as f:
            config = yaml.safe_load(f)

        return cls(
            app_name=config["app"]["name"],
            app_version=config["app"]["version"],
            log_level=config["logging"]["level"],
            log_max_file_size_mb=config["logging"]["max_file_size_mb"],
            log_backup_count=config["logging"]["backup_count"],
            logs_dir=config["logging"]["dir"],
            log_file=config["logging"]["file"],
            llm_model_name=config["llm"]["model_name"],
            llm_model_provider=config["llm"]["model_provider"],
            llm_temperature=float(config["llm"]["temperature"]),
            insights_max_records=config["insights"]["max_records"],
            insights_count=config["insights"]["count"],
            service_host=config["service"]["host"],
            service_port=config["service"]["port"],
            client_base_url=config["client"]["base_url"],
            client_timeout_seconds=config["client"].get("timeout_seconds"),
            config_dir=config["paths"]["config_dir"],
            config_file=config["paths"]["config_file"]
        )


# Global settings instance
_settings: AppSettings = None


def get_settings() -> AppSettings:
    """Get or create global settings instance."""
    global _settings
    if _settings is None:
        _settings = AppSettings.load()
    return _settings
