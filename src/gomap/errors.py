"""
Structured error codes for gomap failures.

Error codes that callers can programmatically handle:
- GOMAP_ERR_CONFIG: No usable go.mod module declaration
- GOMAP_ERR_LOAD: A package or file could not be loaded or parsed
- GOMAP_ERR_IO: A file or directory could not be read
- GOMAP_ERR_NOT_FOUND: Path given on the command line does not exist
"""

from dataclasses import dataclass, field
from typing import Any


# Error codes
ERR_CONFIG = "GOMAP_ERR_CONFIG"
ERR_LOAD = "GOMAP_ERR_LOAD"
ERR_IO = "GOMAP_ERR_IO"
ERR_NOT_FOUND = "GOMAP_ERR_NOT_FOUND"
ERR_INTERNAL = "GOMAP_ERR_INTERNAL"


class GomapError(Exception):
    """Base class for fatal analysis errors."""

    code = ERR_INTERNAL


class ConfigurationError(GomapError):
    """The project root has no discoverable module path."""

    code = ERR_CONFIG


class LoadError(GomapError):
    """Loading or parsing a compilation unit failed."""

    code = ERR_LOAD


@dataclass
class GomapErrorInfo:
    """Structured error response for machine parsing."""

    code: str
    message: str
    details: dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> dict:
        """Convert to JSON-serializable dict."""
        return {
            "error": True,
            "code": self.code,
            "message": self.message,
            "details": self.details,
        }


def make_error(code: str, message: str, **details) -> dict:
    """Create a structured error response dict."""
    return GomapErrorInfo(code=code, message=message, details=details).to_dict()


def error_code_for(exc: BaseException) -> str:
    """Map an exception raised during a run to its error code."""
    if isinstance(exc, GomapError):
        return exc.code
    if isinstance(exc, FileNotFoundError):
        return ERR_NOT_FOUND
    if isinstance(exc, OSError):
        return ERR_IO
    return ERR_INTERNAL
