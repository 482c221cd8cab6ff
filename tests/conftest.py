import socket
import subprocess
import threading

import pytest
from requests.structures import CaseInsensitiveDict


class FakeResponse:
    """Just enough of requests.Response for fetch_pdf."""

    def __init__(self, status_code=200, body=b"", headers=None, reason="OK", chunks=None):
        self.status_code = status_code
        self.reason = reason
        self.headers = CaseInsensitiveDict(headers or {})
        self._chunks = chunks if chunks is not None else [body]
        self.closed = False

    @property
    def ok(self):
        return 200 <= self.status_code < 300

    def iter_content(self, chunk_size=1):
        for chunk in self._chunks:
            yield chunk

    def close(self):
        self.closed = True

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        self.close()


class RecordingGet:
    def __init__(self, response=None, exc=None):
        self.response = response
        self.exc = exc
        self.calls = []

    def __call__(self, url, **kwargs):
        self.calls.append((url, kwargs))
        if self.exc is not None:
            raise self.exc
        return self.response


class RecordingRun:
    def __init__(self, returncode=0, exc=None):
        self.returncode = returncode
        self.exc = exc
        self.calls = []

    def __call__(self, cmd, **kwargs):
        self.calls.append((cmd, kwargs))
        if self.exc is not None:
            raise self.exc
        return subprocess.CompletedProcess(cmd, self.returncode)


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for name in (
        "PDF_FETCH_URL",
        "PDF_FETCH_OUT",
        "PDF_FETCH_TIMEOUT_MS",
        "PDF_FETCH_CURL",
        "PDF_FETCH_LOG_DIR",
    ):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def raw_server(monkeypatch):
    """
    One-shot HTTP server on 127.0.0.1. `start(handler)` returns the base
    URL; handler(conn) writes the raw reply after the request is read.
    """
    for name in ("HTTP_PROXY", "http_proxy", "ALL_PROXY", "all_proxy"):
        monkeypatch.delenv(name, raising=False)

    listener = socket.socket(socket.AF_INET, socket.SOCK_STREAM)
    listener.bind(("127.0.0.1", 0))
    listener.listen(1)
    listener.settimeout(10)
    threads = []

    def start(handler):
        def serve():
            try:
                conn, _ = listener.accept()
            except OSError:
                return
            with conn:
                try:
                    conn.recv(65536)
                    handler(conn)
                except OSError:
                    # client went away
                    pass

        thread = threading.Thread(target=serve, daemon=True)
        thread.start()
        threads.append(thread)
        host, port = listener.getsockname()
        return f"http://{host}:{port}"

    yield start

    for thread in threads:
        thread.join(timeout=10)
    listener.close()
