from __future__ import annotations

import socket
import threading
from typing import Dict, List, Type

import requests
from requests.adapters import HTTPAdapter
from urllib3.connection import HTTPConnection, HTTPSConnection
from urllib3.connectionpool import HTTPConnectionPool, HTTPSConnectionPool

from pdf_fetch.logging_config import get_logger

logger = get_logger("transport")


class SocketWatch:
    """
    Remembers every socket a session opens so a watchdog thread can cut
    them all at once. Sockets registered after abort() are cut on arrival.
    """

    def __init__(self):
        self._lock = threading.Lock()
        self._sockets: List[socket.socket] = []
        self.aborted = False

    def register(self, sock: socket.socket) -> None:
        with self._lock:
            self._sockets.append(sock)
            if self.aborted:
                _shutdown(sock)

    def abort(self) -> None:
        with self._lock:
            self.aborted = True
            logger.debug("Deadline reached, shutting down %d socket(s)", len(self._sockets))
            for sock in self._sockets:
                _shutdown(sock)


def _shutdown(sock: socket.socket) -> None:
    try:
        sock.shutdown(socket.SHUT_RDWR)
    except OSError as e:
        # already closed by the pool
        logger.debug("Socket shutdown skipped: %r", e)


class _WatchedConnection:
    watch: SocketWatch

    def connect(self):
        super().connect()  # type: ignore[misc]
        self.watch.register(self.sock)  # type: ignore[attr-defined]


def _watched_pools(watch: SocketWatch) -> Dict[str, Type[HTTPConnectionPool]]:
    conn = type("WatchedHTTPConnection", (_WatchedConnection, HTTPConnection), {"watch": watch})
    tls_conn = type(
        "WatchedHTTPSConnection", (_WatchedConnection, HTTPSConnection), {"watch": watch}
    )
    return {
        "http": type("WatchedHTTPConnectionPool", (HTTPConnectionPool,), {"ConnectionCls": conn}),
        "https": type(
            "WatchedHTTPSConnectionPool", (HTTPSConnectionPool,), {"ConnectionCls": tls_conn}
        ),
    }


class WatchedAdapter(HTTPAdapter):
    """HTTPAdapter whose connections register their sockets with a SocketWatch."""

    def __init__(self, watch: SocketWatch, **kwargs):
        # HTTPAdapter.__init__ builds the pool manager, so set this first
        self.watch = watch
        super().__init__(**kwargs)

    def init_poolmanager(self, *args, **kwargs):
        super().init_poolmanager(*args, **kwargs)
        self.poolmanager.pool_classes_by_scheme = _watched_pools(self.watch)

    def proxy_manager_for(self, proxy, **proxy_kwargs):
        manager = super().proxy_manager_for(proxy, **proxy_kwargs)
        manager.pool_classes_by_scheme = _watched_pools(self.watch)
        return manager


def open_session(watch: SocketWatch) -> requests.Session:
    session = requests.Session()
    adapter = WatchedAdapter(watch)
    session.mount("http://", adapter)
    session.mount("https://", adapter)
    return session


__all__ = ["SocketWatch", "WatchedAdapter", "open_session"]
