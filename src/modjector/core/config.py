# Copyright 2026 Firefly Software Solutions Inc.
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.
"""Application settings read from a mapping, a YAML/TOML file and the environment."""

from __future__ import annotations

import os
import tomllib
from collections.abc import Mapping
from pathlib import Path
from typing import Any

import yaml  # type: ignore[import-untyped]

from modjector.kernel.exceptions import ModjectorException

ENV_PREFIX = "MODJECTOR_"

_MISSING = object()


class Config:
    """Nested settings addressed by dotted keys such as ``modjector.logging.format``.

    An environment variable named after the key wins over the stored value:
    ``modjector.logging.format`` is overridden by ``MODJECTOR_LOGGING_FORMAT``.
    """

    def __init__(self, data: Mapping[str, Any] | None = None) -> None:
        self._data: dict[str, Any] = dict(data or {})

    @classmethod
    def load(cls, path: str | Path) -> Config:
        """Read *path* as TOML when it ends in ``.toml``, as YAML otherwise."""
        path = Path(path)
        text = path.read_text(encoding="utf-8")
        data = tomllib.loads(text) if path.suffix == ".toml" else yaml.safe_load(text)
        if data is None:
            data = {}
        if not isinstance(data, dict):
            raise ModjectorException(
                f"{path}: expected a mapping at the top level, got {type(data).__name__}",
                code="CONFIG_INVALID",
                context={"path": str(path)},
            )
        return cls(data)

    @staticmethod
    def env_key(key: str) -> str:
        """Environment variable that overrides *key*."""
        return ENV_PREFIX + key.removeprefix("modjector.").upper().replace(".", "_").replace("-", "_")

    def get(self, key: str, default: Any = None) -> Any:
        override = os.environ.get(self.env_key(key))
        if override is not None:
            return override
        value = self._lookup(key)
        return default if value is _MISSING else value

    def get_section(self, prefix: str) -> dict[str, Any]:
        """Every entry directly under *prefix*, each subject to its own env override."""
        section = self._lookup(prefix)
        if not isinstance(section, Mapping):
            return {}
        return {name: self.get(f"{prefix}.{name}", value) for name, value in section.items()}

    def _lookup(self, key: str) -> Any:
        value: Any = self._data
        for part in key.split("."):
            if not isinstance(value, Mapping) or part not in value:
                return _MISSING
            value = value[part]
        return value
