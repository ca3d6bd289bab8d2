"""
Configuration loader for config.json
"""
import os
import json
from pathlib import Path
from typing import Optional, Dict, Any
from colorama import Fore, Style

from ..errors import ConfigError
from .logger import get_logger

log = get_logger(__name__)

CONFIG_ENV_VAR = "BUCKETPULL_CONFIG"

# Default configuration with placeholder values.
# Used to bootstrap config.json when it does not exist yet.
DEFAULT_CONFIG: Dict[str, Any] = {
    "region": "",
    "bucket": "",
    "profile": "",
    "clear_subdir": "data",
    "continue_on_error": False,
    "keep_local_copy": True,
    "strip_prefix": False,
    "encoding": "utf-8",
    "connect_timeout": 60,
    "read_timeout": 60,
}


class ConfigLoader:
    """Handles loading and saving configuration files."""

    @staticmethod
    def get_config_path():
        """
        Get full path to config.json.

        ``$BUCKETPULL_CONFIG`` wins over ``~/.bucketpull/config.json``.

        Returns:
            Full path to config file
        """
        override = os.environ.get(CONFIG_ENV_VAR, "").strip()
        if override:
            return override
        return str(Path.home() / ".bucketpull" / "config.json")

    @staticmethod
    def ensure_config_exists():
        """
        Ensure config.json exists, creating it with defaults if missing.

        Returns:
            Path to the config.json file
        """
        config_path = Path(ConfigLoader.get_config_path())

        if not config_path.exists():
            config_path.parent.mkdir(parents=True, exist_ok=True)
            with open(config_path, 'w') as f:
                json.dump(DEFAULT_CONFIG, f, indent=2)
            log.info("Created default config.json at %s", config_path)

        return config_path

    @staticmethod
    def load_config_json():
        """
        Load config.json, creating it with default values if missing.

        Keys absent from the file fall back to :data:`DEFAULT_CONFIG`.

        Returns:
            Configuration dictionary with defaults

        Raises:
            ConfigError: if the file exists but is not a JSON object
        """
        config_path = ConfigLoader.ensure_config_exists()

        try:
            with open(config_path, 'r') as f:
                data = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            raise ConfigError(f"Error loading {config_path}: {e}") from e

        if not isinstance(data, dict):
            raise ConfigError(f"{config_path} must contain a JSON object")

        config = dict(DEFAULT_CONFIG)
        config.update(data)
        return config


def merge_cli_overrides(config, **overrides):
    """Return a copy of *config* with every non-empty override applied.

    Args:
        config: Configuration dictionary
        **overrides: Values from command-line flags (``None`` means unset)

    Returns:
        New configuration dictionary
    """
    merged = dict(config or {})
    for key, value in overrides.items():
        if value is not None and value != "":
            merged[key] = value
    return merged


def handle_config_update(config_json_string):
    """Handle config update command.

    Args:
        config_json_string: JSON string with config updates

    Returns:
        Exit code (0 for success, 1 for error)
    """
    try:
        config_updates = json.loads(config_json_string)
    except json.JSONDecodeError as e:
        log.error("Invalid JSON in --config argument: %s", e)
        return 1

    if not isinstance(config_updates, dict):
        log.error("--config must be a JSON object (dictionary)")
        return 1

    try:
        config_path = ConfigLoader.ensure_config_exists()
        current_config = ConfigLoader.load_config_json()
    except (OSError, ConfigError) as e:
        log.error("Failed to update configuration: %s", e)
        return 1

    invalid_keys = [key for key in config_updates if key not in current_config]
    if invalid_keys:
        log.error("Invalid configuration key(s): %s", ', '.join(invalid_keys))
        print(f"\n{Fore.YELLOW}Valid keys in config.json:{Style.RESET_ALL}")
        for key in sorted(current_config.keys()):
            print(f"  • {key}")
        return 1

    current_config.update(config_updates)

    try:
        with open(config_path, 'w') as f:
            json.dump(current_config, f, indent=2)
    except OSError as e:
        log.error("Failed to write %s: %s", config_path, e)
        return 1

    print(f"\n{Fore.GREEN}[SUCCESS] Configuration updated successfully{Style.RESET_ALL}")
    print(f"\n{Fore.CYAN}Updated values:{Style.RESET_ALL}")
    for key, value in config_updates.items():
        print(f"  {key}: {mask_value(key, value)}")

    print(f"\n{Fore.CYAN}Config file: {config_path}{Style.RESET_ALL}\n")
    return 0


def mask_value(key: str, value: Any) -> Any:
    """Mask values whose key looks sensitive.

    Example:
        >>> mask_value('profile', 'dev')
        'dev'
        >>> mask_value('secret_key', 'abcdefgh')
        'abcd...********'
    """
    if any(sensitive in key.lower() for sensitive in ['token', 'key', 'password', 'secret']):
        if value and len(str(value)) > 4:
            return f"{str(value)[:4]}...{'*' * 8}"
    return value


def get_client_timeouts(config: Optional[Dict[str, Any]]) -> Dict[str, int]:
    """Extract connect/read timeouts for the S3 client.

    Example:
        >>> get_client_timeouts({'connect_timeout': 5})
        {'connect_timeout': 5, 'read_timeout': 60}
    """
    config = config or {}
    return {
        "connect_timeout": int(config.get("connect_timeout") or DEFAULT_CONFIG["connect_timeout"]),
        "read_timeout": int(config.get("read_timeout") or DEFAULT_CONFIG["read_timeout"]),
    }
