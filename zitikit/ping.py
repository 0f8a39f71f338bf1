"""Latency probes between two identities: payloads, statistics and echo handling."""

from __future__ import annotations

import logging
import math
import random
from dataclasses import dataclass, field
from typing import Protocol

log = logging.getLogger(__name__)

PING_ALPHABET = "abcdefghijklmnopqrstuvwxyzABCDEFGHIJKLMNOPQRSTUVWXYZ0123456789"
MAX_PING_LENGTH = 1500
MAX_COUNTER = 65535
DEFAULT_SERVICE = "ziti-ping"


class _Connection(Protocol):
    def recv(self, size: int) -> bytes: ...

    def sendall(self, data: bytes) -> None: ...

    def close(self) -> None: ...


def random_ping_data(n: int, rng: random.Random | None = None) -> str:
    """Return ``n`` random letters and digits."""
    if n < 0:
        raise ValueError(f"ping data length must not be negative, got {n}")
    chooser = rng if rng is not None else random
    return "".join(chooser.choice(PING_ALPHABET) for _ in range(n))


def make_ping_payload(seq: int, length: int, rng: random.Random | None = None) -> str:
    """Build ``"<seq>:<random data>"`` padded out to ``length`` characters."""
    prefix = f"{seq}:"
    return prefix + random_ping_data(length - len(prefix), rng)


def validate_ping_options(length: int, timeout: int, number: int) -> None:
    """Check the client options; raise ValueError naming the offending one."""
    if not 0 < length <= MAX_PING_LENGTH:
        raise ValueError("-l,--length needs to be an integer in range 1-1500")
    if not 0 <= timeout <= MAX_COUNTER:
        raise ValueError("-t, --time-out needs to be an integer in range 0-65535")
    if not 0 <= number <= MAX_COUNTER:
        raise ValueError("-n, --number needs to be an integer in range 0-65535")


def _parse_seq(text: str) -> int:
    try:
        return int(text)
    except ValueError:
        return 0


@dataclass
class PingSession:
    """Round trip times and counters for one run against a remote identity."""

    identity: str
    roundtrip: list[float] = field(default_factory=list)
    psent: int = 1
    prec: int = 0
    avgrt: float = 0.0
    maxrt: float = 0.0
    minrt: float = 0.0
    stddv: float = 0.0

    def record(self, sent: str, received: str, elapsed_ms: float) -> bool:
        """Record one reply; return True if it echoed what was sent."""
        self.roundtrip.append(elapsed_ms)
        if received != sent:
            return False
        self.prec = _parse_seq(received.split(":", 1)[0])
        return True

    def compute_stats(self) -> None:
        """Fill in minimum, maximum, mean and standard deviation."""
        if not self.roundtrip:
            self.avgrt = self.maxrt = self.minrt = self.stddv = 0.0
            return
        count = len(self.roundtrip)
        self.minrt = min(self.roundtrip)
        self.maxrt = max(self.roundtrip)
        self.avgrt = sum(self.roundtrip) / count
        variance = sum((value - self.avgrt) ** 2 for value in self.roundtrip) / count
        self.stddv = math.sqrt(variance)

    def summary(self) -> str:
        """Statistics report printed when the run ends."""
        self.compute_stats()
        loss = (1.0 - self.prec / self.psent) * 100.0 if self.psent else math.nan
        return (
            f"\n--- {self.identity} ping statistics ---"
            f"\n{self.psent} packets transmitted and {self.prec} packets recieved, "
            f"{loss:.2f}% packet loss\n"
            f"round-trip min/max/avg/stddev {self.minrt:.3f}/{self.maxrt:.3f}/"
            f"{self.avgrt:.3f}/{self.stddv:.3f} ms\n"
        )


def handle_ping(conn: _Connection) -> None:
    """Echo everything read from ``conn`` back until it closes."""
    try:
        while True:
            try:
                data = conn.recv(MAX_PING_LENGTH)
            except OSError:
                return
            if not data:
                return
            try:
                conn.sendall(data)
            except OSError as exc:
                log.error("failed to write. closing connection: %s", exc)
                return
    finally:
        conn.close()