"""Small HTTP handlers served over a service listener or plain TCP."""

from __future__ import annotations

import re
import socket
from typing import Callable, Iterable
from urllib.parse import parse_qs

_INT = re.compile(r"[+-]?[0-9]+")
_INT64_MIN = -(2**63)
_INT64_MAX = 2**63 - 1
_TEXT = [("Content-Type", "text/plain; charset=utf-8")]

StartResponse = Callable[..., object]
WSGIApp = Callable[[dict, StartResponse], Iterable[bytes]]


def _first(query: str, key: str) -> str:
    values = parse_qs(query, keep_blank_values=True).get(key)
    return values[0] if values else ""


def _to_int(text: str) -> int:
    """Parse a decimal integer; anything unparsable counts as 0."""
    if not _INT.fullmatch(text):
        return 0
    return max(_INT64_MIN, min(_INT64_MAX, int(text)))


def greeting(name: str, server_type: str) -> str:
    """The greeter's reply for ``name`` ("" when none was given)."""
    if name:
        return f"Hello, {name}, from {server_type}\n"
    return "Who are you?\n"


def greeter_app(server_type: str) -> WSGIApp:
    """WSGI app greeting whoever is named by the ``name`` query parameter."""

    def app(environ: dict, start_response: StartResponse) -> Iterable[bytes]:
        name = _first(environ.get("QUERY_STRING", ""), "name")
        if name:
            print(f"Saying hello to {name}, coming in from {server_type}")
        else:
            print("Asking for introduction")
        body = greeting(name, server_type).encode("utf-8")
        start_response("200 OK", _TEXT + [("Content-Length", str(len(body)))])
        return [body]

    return app


def add_response(query: str, prefix: str = "") -> str:
    """Sum the ``a`` and ``b`` query parameters and describe the sum."""
    a = _to_int(_first(query, "a"))
    b = _to_int(_first(query, "b"))
    return f"{prefix}a+b={a}+{b}={a + b}"


def hello_response(hostname: str) -> str:
    return f"zitified hello from {hostname}"


def exercise_app(prefix: str = "", hostname: str | None = None) -> WSGIApp:
    """WSGI app with ``/hello`` and ``/add`` routes."""

    def app(environ: dict, start_response: StartResponse) -> Iterable[bytes]:
        path = environ.get("PATH_INFO", "")
        if path == "/hello":
            body = hello_response(hostname if hostname is not None else socket.gethostname())
        elif path == "/add":
            body = add_response(environ.get("QUERY_STRING", ""), prefix)
        else:
            data = b"404 page not found\n"
            start_response("404 Not Found", _TEXT + [("Content-Length", str(len(data)))])
            return [data]
        data = body.encode("utf-8")
        start_response("200 OK", _TEXT + [("Content-Length", str(len(data)))])
        return [data]

    return app