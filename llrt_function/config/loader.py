"""Configuration loading for llrt_function.

This module handles loading build configuration from an llrt.yaml file
beside the CDK app and from LLRT_* environment variables.

Contract:
- Inputs: Config file path, environment variables
- Outputs: LlrtSettings objects
- Side Effects: None, except create_default_config which writes the template
"""

import logging
import os
from pathlib import Path

import yaml

from ..storage.paths import get_config_path
from .settings import LlrtSettings

logger = logging.getLogger(__name__)

DEFAULT_CONFIG = """# llrt-function configuration
# Values can be overridden with LLRT_* environment variables (e.g. LLRT_CACHE_DIR)

# Where LLRT release archives are downloaded from
release_base: "https://github.com/awslabs/llrt/releases"

# Cache root for downloaded bootstrap binaries
# Default: $LLRT_HOME/llrt (LLRT_HOME defaults to ./.tmp)
# cache_dir: ".tmp/llrt"

# Seconds before a download or a wait on the cache lock fails the build
download_timeout: 60
lock_timeout: 300

# Re-download binaries even when they are already cached
force_refresh: false

log_level: "info"
"""


def create_default_config(config_path: Path | None = None) -> Path:
    """Create default config file if it doesn't exist.

    Args:
        config_path: Optional target path (default: llrt.yaml in the working directory)

    Returns:
        Path to the config file

    Example:
        >>> path = create_default_config()
        >>> assert path.exists()
    """
    if config_path is None:
        config_path = get_config_path()

    if config_path.exists():
        logger.debug(f"Config file already exists: {config_path}")
        return config_path

    config_path.parent.mkdir(parents=True, exist_ok=True)
    config_path.write_text(DEFAULT_CONFIG, encoding="utf-8")
    logger.info(f"Created default config: {config_path}")
    return config_path


def load_config(config_path: Path | None = None) -> LlrtSettings:
    """Load build configuration from YAML and environment.

    Environment variables take precedence over YAML settings.
    Variables should be prefixed with LLRT_ (e.g., LLRT_DOWNLOAD_TIMEOUT).
    A missing config file is not an error; defaults apply.

    Args:
        config_path: Optional config file path (default: ./llrt.yaml)

    Returns:
        Validated settings

    Example:
        >>> settings = load_config()
        >>> assert isinstance(settings, LlrtSettings)
    """
    if config_path is None:
        config_path = get_config_path()

    yaml_settings = {}
    if config_path.exists():
        try:
            with open(config_path, encoding="utf-8") as f:
                yaml_settings = yaml.safe_load(f) or {}
            logger.debug(f"Loaded config from {config_path}")
        except Exception as e:
            logger.warning(f"Failed to load config from {config_path}: {e}")
            logger.info("Using default settings and environment variables")

    if not isinstance(yaml_settings, dict):
        logger.warning(f"Ignoring config {config_path}: expected a mapping, got {type(yaml_settings).__name__}")
        yaml_settings = {}

    # Only pass YAML values that don't have corresponding env vars
    filtered_yaml = {}
    for key, value in yaml_settings.items():
        env_key = f"LLRT_{str(key).upper()}"
        if env_key not in os.environ:
            filtered_yaml[key] = value

    settings = LlrtSettings(**filtered_yaml)

    logger.debug(
        f"LLRT configuration loaded: release_base={settings.release_base}, "
        f"cache_dir={settings.cache_dir or 'default'}, force_refresh={settings.force_refresh}"
    )

    return settings
