"""Configuration management for dnsboard"""

from pydantic_settings import BaseSettings
from pydantic import ConfigDict
from typing import Optional, List
import yaml
import os


class APIConfig(BaseSettings):
    """Resolver management API connection"""
    base_url: str = "http://localhost:3000"
    verify_ssl: bool = False  # Self-signed certs are common
    timeout: float = 30.0  # seconds

    model_config = ConfigDict(
        env_prefix="DNSBOARD_API_",
        env_file=".env"
    )


class PollingConfig(BaseSettings):
    """Refetch intervals per collection, in seconds"""
    entries_seconds: int = 300
    logs_seconds: int = 10
    stats_seconds: int = 10


class TableConfig(BaseSettings):
    """Table widget defaults"""
    debounce_ms: int = 500  # Global search quiet period
    entry_page_sizes: List[int] = [15, 20, 50, 100]
    entry_default_page_size: int = 15
    log_page_sizes: List[int] = [10, 20, 50, 100]
    log_default_page_size: int = 20


class LoggingConfig(BaseSettings):
    """Logging configuration"""
    level: str = "INFO"
    file: Optional[str] = None


class Config(BaseSettings):
    """Main application configuration"""
    api: APIConfig = APIConfig()
    polling: PollingConfig = PollingConfig()
    table: TableConfig = TableConfig()
    logging: LoggingConfig = LoggingConfig()

    model_config = ConfigDict(
        env_prefix="DNSBOARD_",
        env_file=".env",
        env_nested_delimiter="__",
    )

    @classmethod
    def from_yaml(cls, yaml_path: str = "config.yaml") -> "Config":
        """Load configuration from YAML file"""
        if not os.path.exists(yaml_path):
            # Return default configuration
            return cls()

        with open(yaml_path, "r") as f:
            yaml_data = yaml.safe_load(f)

        if yaml_data is None:
            return cls()

        return cls(**yaml_data)


# Global config instance
config: Optional[Config] = None


def get_config() -> Config:
    """Get global configuration instance"""
    global config
    if config is None:
        config = Config.from_yaml(os.environ.get("DNSBOARD_CONFIG", "config.yaml"))
    return config


def reload_config(yaml_path: Optional[str] = None) -> Config:
    """Reload configuration from file"""
    global config
    config = Config.from_yaml(yaml_path or os.environ.get("DNSBOARD_CONFIG", "config.yaml"))
    return config


def save_config(config_obj: Config, yaml_path: str = "config.yaml"):
    """Save configuration to YAML file"""
    config_dict = {
        "api": {
            "base_url": config_obj.api.base_url,
            "verify_ssl": config_obj.api.verify_ssl,
            "timeout": config_obj.api.timeout,
        },
        "polling": {
            "entries_seconds": config_obj.polling.entries_seconds,
            "logs_seconds": config_obj.polling.logs_seconds,
            "stats_seconds": config_obj.polling.stats_seconds,
        },
        "table": {
            "debounce_ms": config_obj.table.debounce_ms,
            "entry_page_sizes": config_obj.table.entry_page_sizes,
            "entry_default_page_size": config_obj.table.entry_default_page_size,
            "log_page_sizes": config_obj.table.log_page_sizes,
            "log_default_page_size": config_obj.table.log_default_page_size,
        },
        "logging": {
            "level": config_obj.logging.level,
            "file": config_obj.logging.file,
        },
    }

    with open(yaml_path, "w") as f:
        yaml.dump(config_dict, f, default_flow_style=False, sort_keys=False)
