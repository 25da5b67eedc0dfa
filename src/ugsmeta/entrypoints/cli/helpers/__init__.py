"""CLI helpers for UGSMETA.

Utilities used by the command-line interface: URL sanitization for safe
display, message emitters that write to stderr with emoji→ASCII fallbacks,
logger-level option parsing, and translation of application errors into
Click errors.
"""

from .db_url import sanitize_url
from .errors import translate_errors
from .messages import error, success, warn

__all__ = ["error", "sanitize_url", "success", "translate_errors", "warn"]
