import pytest

from conftest import RecordingRun
from pdf_fetch.args import DownloadRequest
from pdf_fetch.errors import FallbackFatalError
from pdf_fetch.fallback import build_curl_command, curl_timeouts, run_curl_download


@pytest.mark.parametrize(
    "timeout_ms, expected",
    [
        (10, (5, 10)),
        (1_000_000, (120, 600)),
        (180_000, (120, 180)),
        (60_000, (60, 65)),
        (7_999, (7, 12)),
        (600_000, (120, 600)),
    ],
)
def test_curl_timeouts(timeout_ms, expected):
    assert curl_timeouts(timeout_ms) == expected


def test_curl_timeouts_bounds():
    previous = (0, 0)
    for ms in range(1, 1_000_000, 997):
        connect, max_time = curl_timeouts(ms)
        assert 5 <= connect <= 120
        assert connect + 5 <= max_time <= 600
        assert connect >= previous[0] and max_time >= previous[1]
        previous = (connect, max_time)


@pytest.fixture
def req(tmp_path):
    return DownloadRequest(
        url="https://host/a.pdf", output_path=tmp_path / "a.pdf", timeout_ms=180_000
    )


def test_build_curl_command(req):
    assert build_curl_command(req, curl="/usr/bin/curl") == [
        "/usr/bin/curl",
        "-L",
        "--fail",
        "--retry",
        "5",
        "--retry-delay",
        "1",
        "--connect-timeout",
        "120",
        "--max-time",
        "180",
        "-o",
        str(req.output_path),
        "https://host/a.pdf",
    ]


def test_success_inherits_streams(req):
    run = RecordingRun(returncode=0)

    assert run_curl_download(req, runner=run) == req.output_path

    cmd, kwargs = run.calls[0]
    assert cmd[0] == "curl"
    assert kwargs == {"check": False}


def test_non_zero_exit(req):
    with pytest.raises(FallbackFatalError) as excinfo:
        run_curl_download(req, runner=RecordingRun(returncode=22))

    assert excinfo.value.returncode == 22
    assert "exited with code 22" in str(excinfo.value)


def test_launch_failure(req):
    missing = FileNotFoundError(2, "No such file or directory", "curl")

    with pytest.raises(FallbackFatalError) as excinfo:
        run_curl_download(req, runner=RecordingRun(exc=missing))

    assert excinfo.value.__cause__ is missing
    assert excinfo.value.returncode is None
