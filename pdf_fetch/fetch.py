from __future__ import annotations

import threading
from pathlib import Path

import requests

from pdf_fetch.args import DownloadRequest
from pdf_fetch.config import ACCEPT, USER_AGENT
from pdf_fetch.errors import FetchTimeout, TransientFetchError
from pdf_fetch.logging_config import get_logger
from pdf_fetch.transport import SocketWatch, open_session

logger = get_logger("fetch")

CHUNK_SIZE = 64 * 1024


def fetch_pdf(request: DownloadRequest) -> Path:
    """
    Download `request.url` with requests and write it to `request.output_path`.

    The whole exchange (connect, headers, body) must finish within
    `request.timeout_ms`: a watchdog timer shuts the connection down when
    the time is up. Any failure is raised as TransientFetchError so the
    caller can fall back to curl.
    """
    timeout = request.timeout_seconds
    headers = {"User-Agent": USER_AGENT, "Accept": ACCEPT}
    timed_out = f"Timed out after {request.timeout_ms} ms"

    watch = SocketWatch()
    watchdog = threading.Timer(timeout, watch.abort)
    watchdog.daemon = True

    logger.info("Starting fetch for URL: %s", request.url)

    buf = bytearray()
    try:
        with open_session(watch) as http:
            watchdog.start()
            with http.get(
                request.url,
                headers=headers,
                timeout=timeout,
                allow_redirects=True,
                stream=True,
            ) as resp:
                if watch.aborted:
                    raise FetchTimeout(timed_out)

                if not 200 <= resp.status_code < 300:
                    raise TransientFetchError(
                        f"Download failed: {resp.status_code} {resp.reason}",
                        status_code=resp.status_code,
                    )

                content_type = (resp.headers.get("Content-Type") or "").lower()
                if content_type and "application/pdf" not in content_type:
                    logger.warning(
                        "Content-Type is not application/pdf (%s). Saving anyway.", content_type
                    )

                for chunk in resp.iter_content(chunk_size=CHUNK_SIZE):
                    if watch.aborted:
                        break
                    if chunk:
                        buf.extend(chunk)
    except requests.Timeout as e:
        raise FetchTimeout(f"{timed_out}: {e}") from e
    except requests.RequestException as e:
        if watch.aborted:
            raise FetchTimeout(timed_out) from e
        raise TransientFetchError(f"Request failed: {e}") from e
    finally:
        watchdog.cancel()

    # A cut connection can also look like a clean end of stream
    if watch.aborted:
        raise FetchTimeout(timed_out)

    try:
        request.output_path.write_bytes(bytes(buf))
    except OSError as e:
        raise TransientFetchError(f"Could not write {request.output_path}: {e}") from e

    logger.info("Wrote %d bytes to %s", len(buf), request.output_path)
    return request.output_path


__all__ = ["fetch_pdf"]
