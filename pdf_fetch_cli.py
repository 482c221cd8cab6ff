from __future__ import annotations

import sys
from functools import partial
from typing import List, Optional

from pdf_fetch.args import ExitOutcome, resolve_request
from pdf_fetch.config import FetchDefaults
from pdf_fetch.downloader import download_pdf
from pdf_fetch.errors import PdfFetchError
from pdf_fetch.fallback import run_curl_download
from pdf_fetch.logging_config import get_logger

logger = get_logger("cli")


def main(argv: Optional[List[str]] = None) -> int:
    """
    Entry point for `pdf-fetch`. Returns the process exit code.
    """
    if argv is None:
        argv = sys.argv[1:]

    defaults = FetchDefaults.from_env()

    try:
        outcome = resolve_request(argv, defaults)
        if isinstance(outcome, ExitOutcome):
            if outcome.message:
                print(outcome.message, file=sys.stderr)
            return outcome.code

        download_pdf(outcome, fallback=partial(run_curl_download, curl=defaults.curl))
    except PdfFetchError as e:
        logger.debug("Download failed", exc_info=True)
        print(f"Failed: {e}", file=sys.stderr)
        return 1
    except Exception as e:  # noqa: BLE001
        logger.debug("Unexpected error", exc_info=True)
        print(f"Failed: {e!r}", file=sys.stderr)
        return 1

    return 0


if __name__ == "__main__":
    raise SystemExit(main())
