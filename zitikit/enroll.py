"""Working out where an enrolled identity file is written."""

from __future__ import annotations

from pathlib import Path

_OUT_FLAG = "out"


class EnrollmentPathError(Exception):
    """Raised when the JWT or output path for an enrollment is unusable."""


def out_path_from_jwt(jwt_path: str) -> str:
    """Derive the identity file name from the JWT file name."""
    if jwt_path.endswith(".jwt"):
        return jwt_path[: -len(".jwt")] + ".json"
    if jwt_path.endswith(".json"):
        raise EnrollmentPathError(
            f"unexpected configuration. cannot infer '{_OUT_FLAG}' flag if the jwt file "
            f"ends in .json. rename jwt file or provide the '{_OUT_FLAG}' flag"
        )
    return jwt_path + ".json"


def resolve_output_path(jwt_path: str, out_path: str = "") -> str:
    """Check the JWT path and return the path the identity file goes to."""
    if not out_path.strip():
        try:
            out_path = out_path_from_jwt(jwt_path)
        except EnrollmentPathError as exc:
            raise EnrollmentPathError(f"could not set the output path: {exc}") from exc

    if jwt_path and not Path(jwt_path).exists():
        raise EnrollmentPathError(f"the provided jwt file does not exist: {jwt_path}")

    if out_path.strip() == jwt_path.strip():
        raise EnrollmentPathError("the output path must not be the same as the jwt path")

    return out_path