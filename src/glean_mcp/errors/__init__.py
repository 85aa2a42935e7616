"""Error handling for glean_mcp.

- GleanErrorKind/GleanError/GleanException: typed upstream failures
- classify/is_glean_error/format_glean_error: pure helpers over the taxonomy
- Result/Ok/Err: non-raising results for the dispatch router
- ConfigurationError: fatal start-up misconfiguration
"""

from .errors import (
    ConfigurationError,
    GleanError,
    GleanErrorKind,
    GleanException,
    classify,
    format_glean_error,
    is_glean_error,
)
from .result import Err, Ok, Result


__all__ = [
    # Taxonomy
    "GleanErrorKind", "GleanError", "GleanException",
    "classify", "is_glean_error", "format_glean_error",
    # Result
    "Result", "Ok", "Err",
    # Start-up
    "ConfigurationError",
]
