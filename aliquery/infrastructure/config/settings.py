"""Provides functions for loading and accessing configuration settings.

Supports loading from a YAML configuration file (~/.aliquery/config.yaml),
a .env file and environment variables. Only the CLI reads configuration;
the signing core and façades receive everything through their constructors.
"""

import logging
import os
from pathlib import Path
from typing import Any, Dict, Optional

import yaml
from dotenv import load_dotenv

from aliquery.domain.errors import ConfigurationError
from aliquery.domain.models.common import Credential

logger = logging.getLogger(__name__)

# --- Configuration Constants ---
DEFAULT_CONFIG_DIR = Path.home() / ".aliquery"
DEFAULT_CONFIG_FILE = DEFAULT_CONFIG_DIR / "config.yaml"
ENV_FILE_NAME = ".env"

ACCESS_KEY_ID = "aliyun.access_key_id"
ACCESS_SECRET = "aliyun.access_secret"

# --- Global Configuration Store ---
_config: Dict[str, Any] = {}
_test_config: Dict[str, Any] = {}
_loaded = False


def load_configuration(config_file: Path = DEFAULT_CONFIG_FILE, env_file: Optional[Path] = None) -> None:
    """Loads configuration from environment, .env file, and YAML file.

    Priority order (highest to lowest):
    1. Environment Variables
    2. .env file
    3. YAML configuration file
    4. Default values passed to get_config

    Args:
        config_file: Path to the YAML configuration file.
        env_file: Path to the .env file (searches upwards from cwd if None).
    """
    global _config, _loaded
    if _loaded:
        logger.debug("Configuration already loaded.")
        return

    _config = {}

    # 1. YAML file (lowest priority)
    if config_file.exists():
        try:
            with open(config_file, 'r', encoding='utf-8') as f:
                yaml_config = yaml.safe_load(f)
            if isinstance(yaml_config, dict):
                _config.update(flatten(yaml_config))
                logger.info(f"Loaded configuration from YAML: {config_file}")
            elif yaml_config is not None:
                logger.warning(f"YAML config file {config_file} did not contain a dictionary.")
        except (OSError, yaml.YAMLError) as e:
            logger.error(f"Failed to load or parse YAML config {config_file}: {e}")
    else:
        logger.debug(f"YAML config file not found: {config_file}")

    # 2. .env file; override=False so real environment variables win
    dotenv_path = env_file or find_dotenv_path()
    if dotenv_path:
        if load_dotenv(dotenv_path=dotenv_path, override=False):
            logger.info(f"Loaded environment variables from: {dotenv_path}")
    else:
        logger.debug("No .env file found at or above the current directory.")

    _loaded = True


def flatten(tree: Dict[str, Any], prefix: str = "") -> Dict[str, Any]:
    """Flattens nested YAML mappings into dotted keys ('sms.sign_name')."""
    flat: Dict[str, Any] = {}
    for key, value in tree.items():
        dotted = f"{prefix}{key}"
        if isinstance(value, dict):
            flat.update(flatten(value, prefix=f"{dotted}."))
        else:
            flat[dotted] = value
    return flat


def env_var_name(key: str) -> str:
    """Maps a dotted key to its environment variable: 'sms.sign_name' -> 'SMS_SIGN_NAME'."""
    return key.upper().replace('.', '_')


def _coerce(value: str) -> Any:
    if value.lower() == 'true':
        return True
    if value.lower() == 'false':
        return False
    try:
        return float(value) if '.' in value else int(value)
    except ValueError:
        return value


def get_config(key: str, default: Any = None, coerce: bool = True) -> Any:
    """
    Get a configuration value by key.

    Priority:
    1. Test configuration (if in testing mode)
    2. Environment variable
    3. YAML config
    4. Default value

    Args:
        key: The dotted configuration key, e.g. 'logging.level'
        default: Default value if the key is not found
        coerce: Convert environment strings to bool/int/float where they parse

    Returns:
        The configuration value
    """
    if key in _test_config:
        return _test_config[key]

    env_key = env_var_name(key)
    if env_key in os.environ:
        value = os.environ[env_key]
        return _coerce(value) if coerce else value

    if key in _config:
        return _config[key]

    logger.debug(f"Config key '{key}' not found in environment or loaded config. Returning default: {default}")
    return default


def find_dotenv_path() -> Optional[Path]:
    """Searches for the .env file upwards from the current directory."""
    cwd = Path.cwd()
    for path in [cwd] + list(cwd.parents):
        env_path = path / ENV_FILE_NAME
        if env_path.is_file():
            return env_path
    return None

# --- Convenience Functions ---

def get_credential() -> Credential:
    """Builds the access credential from configuration.

    Raises:
        ConfigurationError: If the key id or the secret is not configured.
    """
    key_id = get_config(ACCESS_KEY_ID, coerce=False)
    secret = get_config(ACCESS_SECRET, coerce=False)
    missing = [env_var_name(k) for k, v in ((ACCESS_KEY_ID, key_id), (ACCESS_SECRET, secret)) if not v]
    if missing:
        raise ConfigurationError(f"Missing credentials: set {' and '.join(missing)}")
    return Credential(access_key_id=str(key_id), access_secret=str(secret))


def get_sms_defaults() -> Dict[str, Optional[str]]:
    """Returns the configured default SMS template code and sign name."""
    template_code = get_config('sms.template_code', coerce=False)
    sign_name = get_config('sms.sign_name', coerce=False)
    return {
        "template_code": str(template_code) if template_code is not None else None,
        "sign_name": str(sign_name) if sign_name is not None else None,
    }


def set_config_for_testing(config_dict: Dict[str, Any]) -> None:
    """
    Set configuration values for testing purposes.
    These values will override any existing configuration.

    Args:
        config_dict: Dictionary of configuration values to set
    """
    _test_config.update(config_dict)
    logger.debug(f"Set testing configuration keys: {sorted(config_dict)}")


def clear_test_config() -> None:
    """Clear all testing configuration values."""
    _test_config.clear()


def reset_configuration() -> None:
    """Forgets loaded configuration so the next load_configuration re-reads sources."""
    global _config, _loaded
    _config = {}
    _loaded = False
