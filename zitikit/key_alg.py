"""Key algorithm choice for enrollment."""

from __future__ import annotations

from dataclasses import dataclass

_ALLOWED = ("EC", "RSA")


@dataclass
class KeyAlg:
    """A key algorithm name, either "EC" or "RSA"."""

    value: str = ""

    def __str__(self) -> str:
        return self.value

    def set(self, value: str) -> None:
        """Set the algorithm, case-insensitively; reject anything but EC or RSA."""
        value = value.upper()
        if value not in _ALLOWED:
            raise ValueError("Invalid option -- must specify either 'EC' or 'RSA'")
        self.value = value

    def is_ec(self) -> bool:
        return self.value == "EC"

    def is_rsa(self) -> bool:
        return self.value == "RSA"

    def type_hint(self) -> str:
        """Describe the accepted values."""
        return "RSA|EC"