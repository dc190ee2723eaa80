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
"""LoggingPort — what the application needs from a logging backend."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any, Protocol, runtime_checkable


@dataclass(frozen=True)
class LoggingSettings:
    """Root level, output format (``console`` or ``json``) and per-logger levels."""

    level: str = "INFO"
    fmt: str = "console"
    levels: Mapping[str, str] = field(default_factory=dict)


@runtime_checkable
class LoggingPort(Protocol):
    def configure(self, settings: LoggingSettings) -> None: ...
    def get_logger(self, name: str) -> Any: ...
