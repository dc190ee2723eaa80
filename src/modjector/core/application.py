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
"""Application bootstrap — owns the root module of a module tree."""

from __future__ import annotations

from collections.abc import Mapping
from pathlib import Path
from typing import Any

from modjector.container.exceptions import ContainerException, NotBootstrappedError
from modjector.container.module import Module
from modjector.core.config import Config
from modjector.logging.port import LoggingSettings
from modjector.logging.structlog_adapter import StructlogAdapter


class Application:
    """Entry point that bootstraps a root :class:`Module` and resolves from it.

    Startup sequence:
    1. Load the config (a :class:`Config` or a YAML/TOML path) and configure
       logging from its ``modjector.logging`` section
    2. Build the root module from a ``Module`` or its dict form
    3. Log ``module_bootstrapped`` with dependency and export counts
    """

    def __init__(self, config: Config | str | Path | None = None) -> None:
        if config is None:
            config = Config()
        elif not isinstance(config, Config):
            config = Config.load(config)
        self.config = config
        self._logging = StructlogAdapter()
        self._logging.configure(logging_settings(config))
        self._logger = self._logging.get_logger("modjector.core")
        self._main: Module | None = None

    @property
    def main(self) -> Module:
        """The bootstrapped root module."""
        if self._main is None:
            raise NotBootstrappedError("Application.main")
        return self._main

    def bootstrap(self, module: Module | Mapping[str, Any]) -> Module:
        """Install *module* as the root of the application."""
        try:
            main = module if isinstance(module, Module) else Module.create_module(module)
        except ContainerException as exc:
            self._logger.error("bootstrap_failed", error=str(exc), code=exc.code)
            raise

        self._main = main
        self._logger.info(
            "module_bootstrapped",
            module=main.name,
            dependencies=len(main.injector.dependencies),
            exports=None if main.exports is None else len(main.exports),
        )
        return main

    def resolve(self, name: str) -> Any:
        """Resolve *name* from the root module's injector."""
        try:
            return self.main.injector.resolve(name)
        except ContainerException as exc:
            self._logger.error("resolution_failed", dependency=name, error=str(exc), code=exc.code)
            raise


def logging_settings(config: Config) -> LoggingSettings:
    """Read ``modjector.logging.format`` and ``modjector.logging.level.*``."""
    levels = config.get_section("modjector.logging.level")
    levels.pop("root", None)
    return LoggingSettings(
        level=str(config.get("modjector.logging.level.root", "INFO")),
        fmt=str(config.get("modjector.logging.format", "console")),
        levels={name: str(level) for name, level in levels.items()},
    )
