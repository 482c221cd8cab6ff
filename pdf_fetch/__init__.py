from pdf_fetch.args import DownloadRequest, ExitOutcome, resolve_request
from pdf_fetch.config import FetchDefaults
from pdf_fetch.downloader import download_pdf
from pdf_fetch.errors import (
    FallbackFatalError,
    FetchTimeout,
    PdfFetchError,
    TransientFetchError,
    UsageError,
    ValidationError,
)
from pdf_fetch.fallback import build_curl_command, curl_timeouts, run_curl_download
from pdf_fetch.fetch import fetch_pdf

__all__ = [
    "DownloadRequest",
    "ExitOutcome",
    "resolve_request",
    "FetchDefaults",
    "download_pdf",
    "fetch_pdf",
    "curl_timeouts",
    "build_curl_command",
    "run_curl_download",
    "PdfFetchError",
    "UsageError",
    "ValidationError",
    "TransientFetchError",
    "FetchTimeout",
    "FallbackFatalError",
]
