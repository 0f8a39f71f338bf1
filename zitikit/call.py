"""A one-to-one text call between identities, driven by console commands."""

from __future__ import annotations

import functools
import queue
import sys
import threading
from typing import Callable, Iterator, Protocol, TextIO

CALL_TIMEOUT = 60.0
CALL_APP_DATA = b"hi there"
ANONYMOUS = "Anonymous"


class _CallConnection(Protocol):
    source_identifier: str
    app_data: bytes

    def recv(self, size: int) -> bytes: ...

    def sendall(self, data: bytes) -> None: ...

    def close(self) -> None: ...


class _Dialer(Protocol):
    def __call__(
        self,
        service: str,
        *,
        identity: str,
        connect_timeout: float,
        app_data: bytes,
    ) -> _CallConnection: ...


class _ConnectionEnded(Exception):
    pass


def _lines(conn: _CallConnection) -> Iterator[str]:
    """Yield newline-terminated lines; raise _ConnectionEnded at end of stream."""
    pending = b""
    while True:
        data = conn.recv(4096)
        if not data:
            raise _ConnectionEnded("EOF")
        pending += data
        *complete, pending = pending.split(b"\n")
        for line in complete:
            yield line.decode("utf-8", errors="replace") + "\n"


class CallApp:
    """State of the call console: a pending incoming call and the active one."""

    def __init__(
        self,
        dial: _Dialer,
        service: str = "call",
        identity: str = "",
        out: TextIO | None = None,
        start_io: bool = True,
    ) -> None:
        self.dial = dial
        self.service = service
        self.identity = identity
        self.out = out if out is not None else sys.stdout
        self.start_io = start_io
        self.pending: _CallConnection | None = None
        self.current: _CallConnection | None = None
        self.current_name = ""
        self.events: queue.Queue[Callable[[], None]] = queue.Queue()

    def _write(self, text: str) -> None:
        self.out.write(text)
        self.out.flush()

    @property
    def _prompt(self) -> str:
        return f"{self.identity} > "

    def incoming(self, conn: _CallConnection) -> None:
        """Offer a new incoming call, dropping any unanswered one."""
        self._write("\n")
        if self.pending is not None:
            self._write(
                "New incoming connection, dropping existing unanswered connection request\n"
            )
            self.pending.close()
        app_data = conn.app_data.decode("utf-8", errors="replace")
        info = f"from {conn.source_identifier} with appData '{app_data}'"
        self._write(f"Incoming connection {info}. Type /accept to accept the connection\n")
        self._write(self._prompt)
        self.pending = conn

    def handle_input(self, line: str) -> None:
        """Act on one console line: a command or text for the remote side."""
        if line == "/quit":
            self._write("quitting\n")
            raise SystemExit(0)

        if line == "/accept":
            self._accept()
            return

        if line == "/bye":
            self.disconnect_current()
            return

        if line.startswith("/call"):
            self._call(line[len("/call"):].strip())
            return

        if self.current is None:
            self._write(f"not connected, input ignore\n{self._prompt}")
            return
        try:
            self.current.sendall((line + "\n").encode("utf-8"))
        except OSError as exc:
            self._write(f"write error, closing connection {exc}\n{self._prompt}")
            self.current.close()

    def _accept(self) -> None:
        if self.current is not None:
            self.disconnect_current()
        if self.pending is None:
            self._write(f"no current incoming call, nothing to accept\n{self._prompt}")
            return
        self.current = self.pending
        self.current_name = self.current.source_identifier or ANONYMOUS
        self._start_reader(self.current)
        self.pending = None
        self._write(f"\ncall accepted and in progress...\n{self._prompt}")

    def _call(self, identity: str) -> None:
        if self.current is not None:
            self._write(f"closing open connection before dialing {identity}...\n")
            self.disconnect_current()
        self._write(f"calling {identity}...\n")
        try:
            conn = self.dial(
                self.service,
                identity=identity,
                connect_timeout=CALL_TIMEOUT,
                app_data=CALL_APP_DATA,
            )
        except Exception as exc:
            self._write(f"dial error ({exc}), unable to connect to {identity}\n{self._prompt}")
            return
        self._write(f"connected to {identity}\n{self._prompt}")
        self.current = conn
        self.current_name = identity
        self._start_reader(conn)

    def remote_data(self, line: str) -> None:
        """Show a line received from the other side."""
        self._write(f"\n{self.current_name}: {line}{self._prompt}")

    def disconnected(self) -> None:
        """Forget the active call after its connection ended."""
        self.current = None
        self.current_name = ""

    def disconnect_current(self) -> None:
        """Hang up the active call, if there is one."""
        if self.current is None:
            self._write(f"no active call, nothing to disconnect\n{self._prompt}")
            return
        try:
            self.current.close()
        except OSError as exc:
            self._write(f"error while closing connection {exc}\n")
        self.current = None
        self.current_name = ANONYMOUS
        self._write(f"disconnected...\n{self._prompt}")

    def _start_reader(self, conn: _CallConnection) -> None:
        if self.start_io:
            threading.Thread(target=self._read_remote, args=(conn,), daemon=True).start()

    def _read_remote(self, conn: _CallConnection) -> None:
        try:
            for line in _lines(conn):
                self.events.put(functools.partial(self.remote_data, line))
        except (OSError, _ConnectionEnded) as exc:
            self._write(f"err ({exc})\n{self._prompt}")
            self.events.put(self.disconnected)