from __future__ import annotations

import subprocess
from pathlib import Path
from typing import Callable, List, Optional, Tuple

from pdf_fetch.args import DownloadRequest
from pdf_fetch.errors import FallbackFatalError
from pdf_fetch.logging_config import get_logger

logger = get_logger("fallback")

CURL_RETRIES = 5
CURL_RETRY_DELAY_SECONDS = 1


def curl_timeouts(timeout_ms: int) -> Tuple[int, int]:
    """
    Split the overall timeout into curl's (--connect-timeout, --max-time),
    both in whole seconds.

    Connect is clamped to [5, 120] and max-time to at most 600, but never
    less than connect + 5.
    """
    connect = max(5, min(timeout_ms, 120_000) // 1000)
    max_time = max(connect + 5, min(timeout_ms, 600_000) // 1000)
    return connect, max_time


def build_curl_command(request: DownloadRequest, curl: str = "curl") -> List[str]:
    connect, max_time = curl_timeouts(request.timeout_ms)
    # -L follows redirects, --fail turns non-2xx into a non-zero exit
    return [
        curl,
        "-L",
        "--fail",
        "--retry",
        str(CURL_RETRIES),
        "--retry-delay",
        str(CURL_RETRY_DELAY_SECONDS),
        "--connect-timeout",
        str(connect),
        "--max-time",
        str(max_time),
        "-o",
        str(request.output_path),
        request.url,
    ]


def run_curl_download(
    request: DownloadRequest,
    curl: str = "curl",
    runner: Optional[Callable[..., subprocess.CompletedProcess]] = None,
) -> Path:
    """
    Download with curl, inheriting stdout/stderr so its progress is visible.

    Raises FallbackFatalError if curl cannot be started or exits non-zero.
    """
    runner = runner or subprocess.run
    cmd = build_curl_command(request, curl=curl)
    logger.info("Running: %s", " ".join(cmd))

    try:
        proc = runner(cmd, check=False)
    except OSError as e:
        raise FallbackFatalError(f"Could not run {curl}: {e}") from e

    if proc.returncode != 0:
        raise FallbackFatalError(
            f"{curl} exited with code {proc.returncode}", returncode=proc.returncode
        )

    return request.output_path


__all__ = ["curl_timeouts", "build_curl_command", "run_curl_download"]
