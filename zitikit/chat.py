"""A broadcast chat server and a line reflector for stream connections."""

from __future__ import annotations

import logging
import threading
from typing import BinaryIO, Protocol

log = logging.getLogger(__name__)

READ_SIZE = 1024


class _Connection(Protocol):
    def recv(self, size: int) -> bytes: ...

    def sendall(self, data: bytes) -> None: ...

    def close(self) -> None: ...


class _SocketLike(_Connection, Protocol):
    def makefile(self, mode: str) -> BinaryIO: ...


def _decode(data: bytes) -> str:
    return data.decode("utf-8", errors="surrogateescape")


def _encode(text: str) -> bytes:
    return text.encode("utf-8", errors="surrogateescape")


def _read_chunk(conn: _Connection) -> bytes | None:
    """One read from ``conn``; None once it has ended or failed."""
    try:
        data = conn.recv(READ_SIZE)
    except OSError:
        return None
    return data or None


class ChatServer:
    """Relays each client's messages to every other connected client."""

    def __init__(self) -> None:
        self.clients: dict[str, _Connection] = {}
        self._lock = threading.Lock()

    def client_connected(self, name: str, conn: _Connection) -> None:
        log.info("client '%s' connected", name)
        with self._lock:
            self.clients[name] = conn

    def client_disconnected(self, name: str) -> None:
        log.info("client '%s' disconnected", name)
        with self._lock:
            self.clients.pop(name, None)

    def broadcast(self, source: str, msg: str) -> None:
        """Send ``"<source>: <msg>"`` to every client except the sender.

        A client that cannot be written to is dropped and its connection closed.
        """
        payload = _encode(f"{source}: {msg}")
        log.debug("%s", _decode(payload))
        with self._lock:
            for name, conn in list(self.clients.items()):
                if name == source:
                    continue
                try:
                    conn.sendall(payload)
                except OSError as exc:
                    log.error("failed to write to %s (%s). closing connection", name, exc)
                    del self.clients[name]
                    conn.close()

    def handle_chat(self, conn: _Connection) -> None:
        """Serve one client: its first read is its name, later reads are messages."""
        first = _read_chunk(conn)
        if first is None:
            conn.close()
            return
        name = _decode(first)
        self.client_connected(name, conn)
        while (data := _read_chunk(conn)) is not None:
            self.broadcast(name, _decode(data))
        conn.close()
        self.client_disconnected(name)


def reflect_lines(conn: _SocketLike) -> None:
    """Answer every newline-terminated line with ``"you sent me: <line>"``.

    Returns when the peer closes or a read fails; an unterminated last line
    gets no answer.
    """
    reader = conn.makefile("rb")
    try:
        while True:
            try:
                raw = reader.readline()
            except OSError as exc:
                log.error("%s", exc)
                return
            if not raw.endswith(b"\n"):
                log.error("EOF")
                return
            line = _decode(raw)
            log.info("about to read a string :")
            log.info("                  read : %s", line.strip())
            response = f"you sent me: {line}"
            try:
                conn.sendall(_encode(response))
            except OSError as exc:
                log.error("%s", exc)
            log.info("       responding with : %s", response.strip())
    finally:
        reader.close()