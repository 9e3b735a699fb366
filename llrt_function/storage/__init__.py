"""Storage module for llrt_function.

Resolves where cached LLRT binaries and the build configuration live.

Public Interface:
    - get_home_dir: Get LLRT_HOME
    - get_cache_dir: Get binary cache root
    - get_config_path: Get llrt.yaml location
"""

from .paths import get_cache_dir
from .paths import get_config_path
from .paths import get_home_dir

__all__ = [
    "get_home_dir",
    "get_cache_dir",
    "get_config_path",
]
