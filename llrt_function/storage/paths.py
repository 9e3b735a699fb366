"""Path resolution for llrt_function storage locations.

The cache lives beside the build definition (the CDK app directory), under
a scratch root controlled by the LLRT_HOME environment variable.

Contract:
- Inputs: Environment variables (LLRT_HOME, LLRT_CACHE_DIR, LLRT_CONFIG_FILE)
- Outputs: Resolved Path objects
- Side Effects: Creates the cache directory if it doesn't exist
"""

import os
from pathlib import Path


def get_home_dir() -> Path:
    """Get LLRT_HOME from environment.

    Returns:
        Path to scratch root (default: .tmp)
    """
    root = os.environ.get("LLRT_HOME", ".tmp")
    return Path(root).resolve()


def get_cache_dir() -> Path:
    """Get binary cache directory.

    Returns:
        Path to cache directory ($LLRT_HOME/llrt)

    Environment Variables:
        LLRT_CACHE_DIR: Override cache directory location
        (falls back to $LLRT_HOME/llrt if not set)

    Example:
        >>> cache_dir = get_cache_dir()
        >>> assert cache_dir.name == "llrt" or "LLRT_CACHE_DIR" in os.environ
    """
    cache_dir: Path = get_home_dir() / "llrt"

    env_override: str | None = os.environ.get("LLRT_CACHE_DIR")
    if env_override is not None:
        cache_dir = Path(env_override).expanduser().resolve()

    cache_dir.mkdir(parents=True, exist_ok=True)
    return cache_dir


def get_config_path() -> Path:
    """Get path to the llrt.yaml config file.

    Returns:
        Path to config file ($LLRT_CONFIG_FILE or ./llrt.yaml)
    """
    return Path(os.environ.get("LLRT_CONFIG_FILE", "llrt.yaml")).expanduser().resolve()
