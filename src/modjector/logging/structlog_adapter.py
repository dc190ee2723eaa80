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
"""StructlogAdapter — structlog events rendered through one stdlib stdout handler."""

from __future__ import annotations

import logging
import sys
from typing import Any

import structlog

from modjector.kernel.exceptions import ModjectorException
from modjector.logging.port import LoggingSettings

HANDLER_NAME = "modjector"

_RENDERERS = {
    "console": structlog.dev.ConsoleRenderer,
    "json": structlog.processors.JSONRenderer,
}


def level_number(level: str) -> int:
    """Map a level name to its stdlib number; unknown names mean INFO."""
    return logging.getLevelNamesMapping().get(level.upper(), logging.INFO)


class StructlogAdapter:
    """:class:`LoggingPort` backed by structlog on top of stdlib logging.

    ``configure`` may run several times (once per Application); each run
    replaces the root handler named :data:`HANDLER_NAME` instead of
    stacking another.
    """

    def __init__(self) -> None:
        self.settings = LoggingSettings()

    def configure(self, settings: LoggingSettings) -> None:
        renderer = _RENDERERS.get(settings.fmt.lower())
        if renderer is None:
            raise ModjectorException(
                f"unknown log format {settings.fmt!r}, expected one of {sorted(_RENDERERS)}",
                code="LOGGING_CONFIGURATION",
                context={"format": settings.fmt},
            )

        structlog.configure(
            processors=[
                structlog.contextvars.merge_contextvars,
                structlog.stdlib.add_logger_name,
                structlog.stdlib.add_log_level,
                structlog.processors.TimeStamper(fmt="iso"),
                renderer(),
            ],
            logger_factory=structlog.stdlib.LoggerFactory(),
            wrapper_class=structlog.stdlib.BoundLogger,
            cache_logger_on_first_use=True,
        )

        root = logging.getLogger()
        for existing in [h for h in root.handlers if h.get_name() == HANDLER_NAME]:
            root.removeHandler(existing)
        handler = logging.StreamHandler(sys.stdout)
        handler.set_name(HANDLER_NAME)
        handler.setFormatter(logging.Formatter("%(message)s"))
        root.addHandler(handler)
        root.setLevel(level_number(settings.level))

        for name, level in settings.levels.items():
            logging.getLogger(name).setLevel(level_number(level))
        self.settings = settings

    def get_logger(self, name: str) -> Any:
        return structlog.get_logger(name)
