from __future__ import annotations

from typing import Optional


class PdfFetchError(Exception):
    """Base class for everything this package raises on purpose."""


class UsageError(PdfFetchError):
    """Malformed command line. Turned into an ExitOutcome by the resolver."""


class ValidationError(PdfFetchError):
    """The resolved URL is not an http(s) URL."""


class TransientFetchError(PdfFetchError):
    """
    The in-process HTTP download failed.

    Never fatal on its own: the orchestrator logs it and hands the
    request to the curl fallback.
    """

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code


class FetchTimeout(TransientFetchError):
    """The response did not complete before the request deadline."""


class FallbackFatalError(PdfFetchError):
    """curl could not be launched or exited non-zero."""

    def __init__(self, message: str, returncode: Optional[int] = None):
        super().__init__(message)
        self.returncode = returncode


__all__ = [
    "PdfFetchError",
    "UsageError",
    "ValidationError",
    "TransientFetchError",
    "FetchTimeout",
    "FallbackFatalError",
]
