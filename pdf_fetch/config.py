from __future__ import annotations

import os
from dataclasses import dataclass

from pdf_fetch.logging_config import get_logger

logger = get_logger("config")

# Left in place of a real link, this URL means "nobody edited the defaults"
PLACEHOLDER_URL = "https://example.com/file.pdf"
DEFAULT_OUTPUT_FILE = "downloaded.pdf"
DEFAULT_TIMEOUT_MS = 180_000

USER_AGENT = (
    "Mozilla/5.0 (Macintosh; Intel Mac OS X) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/120 Safari/537.36"
)
ACCEPT = "application/pdf,*/*;q=0.9"


@dataclass(frozen=True)
class FetchDefaults:
    url: str = PLACEHOLDER_URL
    out: str = DEFAULT_OUTPUT_FILE
    timeout_ms: int = DEFAULT_TIMEOUT_MS
    curl: str = "curl"

    @classmethod
    def from_env(cls) -> "FetchDefaults":
        """
        Build defaults, letting these env vars override the built-ins:

          PDF_FETCH_URL         default URL when none is passed
          PDF_FETCH_OUT         default output file
          PDF_FETCH_TIMEOUT_MS  default timeout in milliseconds
          PDF_FETCH_CURL        curl executable used by the fallback
        """
        timeout_ms = DEFAULT_TIMEOUT_MS
        raw_timeout = os.getenv("PDF_FETCH_TIMEOUT_MS")
        if raw_timeout:
            try:
                timeout_ms = int(raw_timeout)
            except ValueError:
                logger.warning(
                    "Ignoring PDF_FETCH_TIMEOUT_MS=%r (not an integer)", raw_timeout
                )
            else:
                if timeout_ms <= 0:
                    logger.warning(
                        "Ignoring PDF_FETCH_TIMEOUT_MS=%r (must be positive)", raw_timeout
                    )
                    timeout_ms = DEFAULT_TIMEOUT_MS

        return cls(
            url=os.getenv("PDF_FETCH_URL") or PLACEHOLDER_URL,
            out=os.getenv("PDF_FETCH_OUT") or DEFAULT_OUTPUT_FILE,
            timeout_ms=timeout_ms,
            curl=os.getenv("PDF_FETCH_CURL") or "curl",
        )


__all__ = [
    "PLACEHOLDER_URL",
    "DEFAULT_OUTPUT_FILE",
    "DEFAULT_TIMEOUT_MS",
    "USER_AGENT",
    "ACCEPT",
    "FetchDefaults",
]
