"""Identity configuration files for connecting to a controller."""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Mapping

ZITI_SESSION = "zt-session"
"""Header name used to pass sessions around."""


class ConfigError(Exception):
    """Raised when a configuration cannot be read or understood."""


@dataclass
class Config:
    """Controller address, identity material and requested config types."""

    zt_api: str = ""
    id: dict[str, Any] = field(default_factory=dict)
    config_types: list[str] = field(default_factory=list)

    @classmethod
    def from_file(cls, path: str | Path) -> "Config":
        """Load a configuration from a JSON file."""
        try:
            raw = Path(path).read_text(encoding="utf-8")
        except OSError as exc:
            raise ConfigError(f"config file ({path}) is not found ") from exc
        try:
            data = json.loads(raw)
            return cls.from_dict(data)
        except (ValueError, ConfigError) as exc:
            raise ConfigError(
                f"failed to load ziti configuration ({path}): {exc}"
            ) from exc

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "Config":
        """Build a configuration from decoded JSON."""
        if not isinstance(data, Mapping):
            raise ConfigError("configuration must be a JSON object")

        zt_api = data.get("ztAPI")
        if zt_api is None:
            zt_api = ""
        elif not isinstance(zt_api, str):
            raise ConfigError("ztAPI must be a string")

        identity = data.get("id")
        if identity is None:
            identity = {}
        elif not isinstance(identity, Mapping):
            raise ConfigError("id must be an object")

        config_types = data.get("configTypes")
        if config_types is None:
            config_types = []
        elif not isinstance(config_types, list) or not all(
            isinstance(item, str) for item in config_types
        ):
            raise ConfigError("configTypes must be a list of strings")

        return cls(zt_api=zt_api, id=dict(identity), config_types=list(config_types))

    def to_dict(self) -> dict[str, Any]:
        """Return the configuration in its JSON form."""
        return {
            "ztAPI": self.zt_api,
            "id": dict(self.id),
            "configTypes": list(self.config_types),
        }