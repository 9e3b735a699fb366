"""Error kinds raised while preparing an LLRT function build.

All of them abort the build definition; none are retried here.
"""


class LlrtError(Exception):
    """Base class for llrt_function errors."""


class ResolutionError(LlrtError, ValueError):
    """Raised when a version/architecture/binary type combination can't be resolved."""


class FetchError(LlrtError):
    """Raised when a release archive can't be downloaded or read."""


class ExtractionError(LlrtError):
    """Raised when a downloaded archive doesn't contain the expected bootstrap."""


class PipelineCompositionError(LlrtError):
    """Raised when caller bundling options can't be merged with the LLRT hooks."""
