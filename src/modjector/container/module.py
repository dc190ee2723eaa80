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
"""Module — a named injector with explicit import and export boundaries."""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from typing import Any

import structlog

from modjector.container.dependency import DependencyConfig
from modjector.container.exceptions import ConfigurationError
from modjector.container.injector import Injector
from modjector.container.registry import Declaration

logger = structlog.get_logger("modjector.container")

EXPORT_ALL = "*"

Exports = str | Iterable[str] | None


class Module:
    """Binds an :class:`Injector` to a name.

    Construction order matters: imported exports are merged first, then the
    module's own declarations are registered, so local names override
    imported ones. ``exports`` is either ``"*"`` (everything registered,
    including imports), a list of locally declared names, or ``None``.
    """

    def __init__(
        self,
        name: str,
        declarations: Iterable[Declaration] = (),
        imports: Iterable[Module] = (),
        exports: Exports = None,
    ) -> None:
        if not name:
            raise ConfigurationError("Module name must not be empty")
        self.name = name
        self.injector = Injector(name)

        for module in imports:
            if module.exports is not None:
                self.injector.add_imports(module.exports)

        self.injector.register(*declarations)
        self.exports: dict[str, DependencyConfig] | None = self._compute_exports(exports)

    def __repr__(self) -> str:
        exported = None if self.exports is None else sorted(self.exports)
        return f"Module({self.name!r}, exports={exported})"

    @classmethod
    def create_module(cls, config: Mapping[str, Any]) -> Module:
        """Build a module from its dict form.

        Keys: ``name`` (required), ``declarations``, ``imports`` and ``exports``.
        """
        if "name" not in config:
            raise ConfigurationError("Module config requires a 'name'")
        return cls(
            name=config["name"],
            declarations=config.get("declarations") or (),
            imports=config.get("imports") or (),
            exports=config.get("exports"),
        )

    def _compute_exports(self, exports: Exports) -> dict[str, DependencyConfig] | None:
        if exports is None:
            return None

        dependencies = self.injector.dependencies
        if exports == EXPORT_ALL:
            return dict(dependencies)

        if isinstance(exports, str):
            exports = [exports]

        exported: dict[str, DependencyConfig] = {}
        for name in exports:
            config = dependencies.get(name)
            if config is None:
                logger.warning("export_not_registered", module=self.name, dependency=name)
            elif config.belongs_to != self.name:
                logger.warning(
                    "export_not_declared_locally",
                    module=self.name,
                    dependency=name,
                    belongs_to=config.belongs_to,
                )
            else:
                exported[name] = config
        return exported
