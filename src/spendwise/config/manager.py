"""Configuration manager for user and credential settings."""
import json
import os
from dataclasses import dataclass, asdict
from pathlib import Path
from typing import Optional

from spendwise.config.settings import get_settings
from spendwise.utils.exceptions import ConfigError

API_KEY_ENV_VAR = "OPENAI_API_KEY"


@dataclass
class Config:
    """User configuration."""
    openai_api_key: str
    log_level: str = "INFO"
    # Base URL of the insight service used by the CLI client
    service_url: Optional[str] = None


class ConfigManager:
    """Manages user configuration stored in the config directory."""

    def __init__(self, config_dir: Optional[Path] = None):
        settings = get_settings()
        self.config_dir = Path(config_dir or settings.config_dir).expanduser()
        self.config_file = self.config_dir / settings.config_file

    def load_config(self) -> Optional[Config]:
        """
        Load configuration from file, with the API key taken from the
        environment when set.

        Returns None when neither a config file nor the environment key exists.
        """
        env_key = os.getenv(API_KEY_ENV_VAR)

        if not self.config_file.exists():
            if env_key:
                return Config(openai_api_key=env_key)
            return None

        try:
            with open(self.config_file, "r", encoding="utf-8") as f:
                config_dict = json.load(f)
            config = Config(**config_dict)
        except (OSError, ValueError, TypeError) as e:
            raise ConfigError(f"Failed to load configuration: {e}")

        if env_key:
            config.openai_api_key = env_key
        return config

    def save_config(self, config: Config) -> None:
        """Save configuration readable by the owner only."""
        try:
            self.config_dir.mkdir(parents=True, exist_ok=True)
            config_json = json.dumps(asdict(config), indent=2)
            with open(self.config_file, "w", encoding="utf-8") as f:
                f.write(config_json)
            os.chmod(self.config_file, 0o600)
        except OSError as e:
            raise ConfigError(f"Failed to save configuration: {e}")

    def validate_config(self, config: Config) -> tuple[bool, str]:
        """Validate configuration values."""
        if not config.openai_api_key:
            return False, "OpenAI API key is required"

        if config.log_level.upper() not in ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"):
            return False, f"Unknown log level: {config.log_level}"

        if config.service_url and not config.service_url.startswith(("http://", "https://")):
            return False, "Service URL must start with http:// or https://"

        return True, "Configuration is valid"
