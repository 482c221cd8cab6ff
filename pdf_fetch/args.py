from __future__ import annotations

import argparse
import os
import re
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Sequence, Union

from pdf_fetch.config import PLACEHOLDER_URL, FetchDefaults
from pdf_fetch.errors import UsageError, ValidationError
from pdf_fetch.logging_config import get_logger

logger = get_logger("args")

PROG = "pdf-fetch"

USAGE = f"""\
Usage:
  {PROG} <pdf_url> [--out <file>] [--timeout <ms>]

Examples:
  {PROG} "https://example.org/report.pdf" --out report.pdf
  {PROG} "https://example.org/report.pdf" --timeout 60000
"""

_HTTP_URL = re.compile(r"^https?://", re.IGNORECASE)


@dataclass(frozen=True)
class DownloadRequest:
    url: str
    output_path: Path
    timeout_ms: int

    @property
    def timeout_seconds(self) -> float:
        return self.timeout_ms / 1000


@dataclass(frozen=True)
class ExitOutcome:
    """
    "Stop here with this exit code" without calling sys.exit, so the
    resolver can be exercised from tests. The CLI prints `message` to
    stderr and exits with `code`.
    """

    code: int
    message: str = ""


class _Parser(argparse.ArgumentParser):
    def error(self, message: str):  # type: ignore[override]
        raise UsageError(message)


def _positive_int(value: str) -> int:
    try:
        ms = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"timeout must be an integer, got {value!r}")
    if ms <= 0:
        raise argparse.ArgumentTypeError(f"timeout must be positive, got {ms}")
    return ms


def build_parser(defaults: FetchDefaults) -> argparse.ArgumentParser:
    p = _Parser(
        prog=PROG,
        description="Download a public PDF, falling back to curl if the direct fetch fails.",
        add_help=False,
        allow_abbrev=False,
    )
    p.add_argument("url", nargs="?", default=None, help="Direct PDF link")
    p.add_argument(
        "--out",
        default=defaults.out,
        help=f"Output file (default: {defaults.out})",
    )
    p.add_argument(
        "--timeout",
        dest="timeout_ms",
        type=_positive_int,
        default=defaults.timeout_ms,
        help=f"Overall timeout in milliseconds (default: {defaults.timeout_ms})",
    )
    p.add_argument("-h", "--help", action="store_true", help="Show usage and exit")
    return p


def _usage_failure(message: str) -> ExitOutcome:
    return ExitOutcome(code=1, message=f"{message}\n\n{USAGE}")


def resolve_request(
    argv: Sequence[str],
    defaults: Optional[FetchDefaults] = None,
    cwd: Optional[Union[str, Path]] = None,
) -> Union[DownloadRequest, ExitOutcome]:
    """
    Turn the command line into a DownloadRequest.

    Returns an ExitOutcome instead when the program should stop right away
    (help requested, or nothing usable on the command line). Raises
    ValidationError when the URL is not http(s).
    """
    defaults = defaults or FetchDefaults()
    parser = build_parser(defaults)

    try:
        args, extras = parser.parse_known_args(list(argv))
    except UsageError as e:
        return _usage_failure(f"Error: {e}")

    if args.help:
        return ExitOutcome(code=0, message=USAGE)

    for token in extras:
        if token.startswith("-"):
            logger.warning("Ignoring unknown flag: %s", token)

    url: str = args.url or defaults.url
    if not url or url == PLACEHOLDER_URL:
        return _usage_failure(
            "Please set a default URL (PDF_FETCH_URL) or pass a PDF URL as the first argument."
        )

    if not _HTTP_URL.match(url):
        raise ValidationError("URL must start with http:// or https://")

    base = Path(cwd) if cwd is not None else Path.cwd()
    output_path = Path(os.path.normpath(os.path.join(os.path.abspath(base), args.out)))

    return DownloadRequest(url=url, output_path=output_path, timeout_ms=args.timeout_ms)

