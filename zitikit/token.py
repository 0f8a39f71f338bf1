"""Enrollment token claims."""

from __future__ import annotations

import time
from dataclasses import dataclass
from typing import Any
from urllib.parse import urlencode, urljoin, urlsplit

ENROLL_PATH = "/edge/client/v1/enroll"


class ClaimsError(Exception):
    """Raised when claims are malformed or not currently valid."""


def _format_duration(seconds: int) -> str:
    sign = "-" if seconds < 0 else ""
    seconds = abs(seconds)
    if seconds == 0:
        return "0s"
    hours, rest = divmod(seconds, 3600)
    minutes, secs = divmod(rest, 60)
    if hours:
        return f"{sign}{hours}h{minutes}m{secs}s"
    if minutes:
        return f"{sign}{minutes}m{secs}s"
    return f"{sign}{secs}s"


@dataclass
class EnrollmentClaims:
    """Claims carried by an enrollment JWT."""

    enrollment_method: str = ""
    audience: str = ""
    expires_at: int = 0
    id: str = ""
    issued_at: int = 0
    issuer: str = ""
    not_before: int = 0
    subject: str = ""
    signature_cert: Any = None

    def enrollment_url(self) -> str:
        """The controller URL to post the enrollment to."""
        try:
            urlsplit(self.issuer)
            base = urljoin(self.issuer, ENROLL_PATH)
        except ValueError as exc:
            raise ClaimsError(f"could not parse issuer as URL: {self.issuer}") from exc
        query = urlencode(sorted({"method": self.enrollment_method, "token": self.id}.items()))
        return f"{base}?{query}"

    def to_map_claims(self) -> dict[str, Any]:
        """Claims as a JWT map; standard claims with zero values are left out."""
        claims: dict[str, Any] = {"em": self.enrollment_method}
        standard = {
            "aud": self.audience,
            "exp": self.expires_at,
            "jti": self.id,
            "iat": self.issued_at,
            "iss": self.issuer,
            "nbf": self.not_before,
            "sub": self.subject,
        }
        claims.update({key: value for key, value in standard.items() if value})
        return claims

    def validate(self, now: int | None = None) -> None:
        """Check time-based claims; raise ClaimsError on the last failure found."""
        if now is None:
            now = int(time.time())
        problem = None
        if self.expires_at and now > self.expires_at:
            problem = f"token is expired by {_format_duration(now - self.expires_at)}"
        if self.issued_at and now < self.issued_at:
            problem = "Token used before issued"
        if self.not_before and now < self.not_before:
            problem = "token is not valid yet"
        if problem is not None:
            raise ClaimsError(problem)