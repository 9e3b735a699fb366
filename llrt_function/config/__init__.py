"""Configuration module for llrt_function.

Provides build configuration loading from YAML and environment variables.

Public Interface:
    - LlrtSettings: Settings model
    - load_config: Load configuration
    - create_default_config: Create default config file
"""

from .loader import create_default_config
from .loader import load_config
from .settings import DEFAULT_RELEASE_BASE
from .settings import LlrtSettings

__all__ = [
    "DEFAULT_RELEASE_BASE",
    "LlrtSettings",
    "load_config",
    "create_default_config",
]
