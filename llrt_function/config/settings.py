"""Settings models for llrt_function.

Contract:
- Inputs: Environment variables, YAML files
- Outputs: Validated settings objects
- Side Effects: None (read-only)
"""

from pathlib import Path

from pydantic import Field
from pydantic import field_validator
from pydantic_settings import BaseSettings
from pydantic_settings import SettingsConfigDict

DEFAULT_RELEASE_BASE = "https://github.com/awslabs/llrt/releases"


class LlrtSettings(BaseSettings):
    """Configuration for LLRT binary resolution and caching.

    Attributes:
        release_base: Base URL of the LLRT GitHub releases
        cache_dir: Root directory for cached binaries (default: $LLRT_HOME/llrt)
        download_timeout: Seconds before an archive download is abandoned
        lock_timeout: Seconds to wait for another build holding the cache lock
        force_refresh: Re-fetch binaries that are already cached
        log_level: Logging level used by the CLI

    Example:
        >>> settings = LlrtSettings()
        >>> assert settings.release_base.endswith("/releases")
        >>> assert settings.force_refresh is False
    """

    model_config = SettingsConfigDict(
        env_prefix="LLRT_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    release_base: str = DEFAULT_RELEASE_BASE
    cache_dir: str | None = None
    download_timeout: float = Field(default=60.0, gt=0)
    lock_timeout: float = Field(default=300.0, gt=0)
    force_refresh: bool = False
    log_level: str = "info"

    @field_validator("release_base")
    @classmethod
    def strip_trailing_slash(cls, v: str) -> str:
        return v.rstrip("/")

    @field_validator("cache_dir")
    @classmethod
    def expand_and_resolve_path(cls, v: str | None) -> str | None:
        """Expand ~ and resolve to absolute path.

        Args:
            v: Path string (may contain ~ or be relative)

        Returns:
            Absolute path as string, or None to use the default location
        """
        if v is None:
            return None
        return str(Path(v).expanduser().resolve())
