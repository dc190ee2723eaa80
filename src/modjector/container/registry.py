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
"""Name-to-config registry with provider expansion and import merging."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import replace
from types import MappingProxyType
from typing import TYPE_CHECKING, Any

from modjector.container.dependency import DependencyConfig
from modjector.container.exceptions import ConfigurationError
from modjector.container.types import Strategy

if TYPE_CHECKING:
    from modjector.container.injector import Injector

Declaration = DependencyConfig | Mapping[str, Any]


class Registry:
    """Owns the mapping from name to :class:`DependencyConfig` for one module.

    Registration is all-or-nothing: every declaration of a ``register`` or
    ``add_imports`` call is validated before any of them is stored.
    """

    def __init__(self, module_name: str, owner: Injector | None = None) -> None:
        self.module_name = module_name
        self._owner = owner
        self._dependencies: dict[str, DependencyConfig] = {}

    @property
    def dependencies(self) -> Mapping[str, DependencyConfig]:
        """Read-only view of every registered config, own and imported."""
        return MappingProxyType(self._dependencies)

    def __contains__(self, name: object) -> bool:
        return name in self._dependencies

    def __len__(self) -> int:
        return len(self._dependencies)

    def register(self, *configs: Declaration) -> None:
        """Validate and store declarations; last write wins except for constants."""
        staged: dict[str, DependencyConfig] = {}
        for raw in configs:
            config = self._prepare(raw)
            self._check_constant(config.name, staged)
            staged[config.name] = config
        self._dependencies.update(staged)

    def add_imports(self, exported: Mapping[str, Declaration]) -> None:
        """Merge another module's exports, keeping their ``belongs_to`` and owner."""
        staged: dict[str, DependencyConfig] = {}
        for name, raw in exported.items():
            config = self._coerce(raw)
            if self._dependencies.get(name) is config:
                continue
            strategy = self._parse_strategy(config)
            if strategy is Strategy.PROVIDER:
                raise ConfigurationError(
                    f"{self.module_name}: cannot import unexpanded provider '{name}'",
                    name=name,
                    module=self.module_name,
                )
            self._check_constant(name, staged)
            if strategy is not config.strategy:
                config = replace(config, strategy=strategy)
            staged[name] = config
        self._dependencies.update(staged)

    def get_config_of(self, name: str) -> DependencyConfig | None:
        """Look up the config registered under *name*."""
        return self._dependencies.get(name)

    def _prepare(self, raw: Declaration) -> DependencyConfig:
        config = self._coerce(raw)
        strategy = self._parse_strategy(config)
        if strategy is Strategy.PROVIDER:
            config = self._expand_provider(config)
            strategy = Strategy(config.strategy)

        if not config.name:
            raise ConfigurationError(
                f"{self.module_name}: dependency declared without a name",
                module=self.module_name,
            )

        return replace(
            config,
            strategy=strategy,
            belongs_to=config.belongs_to or self.module_name,
            owner=self._owner,
        )

    def _expand_provider(self, config: DependencyConfig) -> DependencyConfig:
        """Call the provider once and return the config it produces."""
        if not callable(config.value):
            raise ConfigurationError(
                f"{self.module_name}: provider '{config.name}' must be a callable returning a declaration",
                name=config.name,
                module=self.module_name,
            )

        produced = self._coerce(config.value())
        if not produced.name:
            produced = replace(produced, name=config.name)

        strategy = self._parse_strategy(produced)
        if strategy is Strategy.PROVIDER:
            raise ConfigurationError(
                f"{self.module_name}: provider '{config.name}' returned another provider",
                name=config.name,
                module=self.module_name,
            )
        return replace(produced, strategy=strategy)

    def _check_constant(self, name: str, staged: Mapping[str, DependencyConfig]) -> None:
        existing = staged.get(name) or self._dependencies.get(name)
        if existing is not None and existing.strategy is Strategy.CONSTANT:
            raise ConfigurationError(
                f"{self.module_name}: constant '{name}' is already defined",
                name=name,
                module=self.module_name,
            )

    def _parse_strategy(self, config: DependencyConfig) -> Strategy:
        try:
            return Strategy(config.strategy)
        except ValueError:
            raise ConfigurationError(
                f"{self.module_name}: unknown strategy {config.strategy!r} for '{config.name}'",
                name=config.name,
                module=self.module_name,
            ) from None

    def _coerce(self, raw: Declaration) -> DependencyConfig:
        if isinstance(raw, DependencyConfig):
            return raw
        if isinstance(raw, Mapping):
            return DependencyConfig.from_mapping(raw)
        raise ConfigurationError(
            f"{self.module_name}: expected a DependencyConfig or mapping, got {type(raw).__name__}",
            module=self.module_name,
        )
