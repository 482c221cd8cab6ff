from __future__ import annotations

from pathlib import Path
from typing import Callable

from pdf_fetch.args import DownloadRequest
from pdf_fetch.errors import TransientFetchError
from pdf_fetch.fallback import run_curl_download
from pdf_fetch.fetch import fetch_pdf
from pdf_fetch.logging_config import get_logger

logger = get_logger("downloader")

Fetcher = Callable[[DownloadRequest], Path]


def download_pdf(
    request: DownloadRequest,
    primary: Fetcher = fetch_pdf,
    fallback: Fetcher = run_curl_download,
) -> Path:
    """
    Try the direct HTTP fetch first, then curl exactly once if it fails.

    Errors from the fallback propagate; there is nothing further to try.
    """
    print("PDF URL:", request.url)
    print("Output:", request.output_path)
    print("Timeout (ms):", request.timeout_ms)

    try:
        primary(request)
    except TransientFetchError as e:
        logger.warning("Fetch download failed; falling back to curl: %s", e)
        fallback(request)

    print(f"Saved → {request.output_path}")
    return request.output_path


__all__ = ["download_pdf"]
