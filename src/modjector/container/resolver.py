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
"""Depth-first resolution with module-qualified cycle detection."""

from __future__ import annotations

import difflib
from typing import Any

from modjector.container.dependency import DependencyConfig
from modjector.container.exceptions import ConfigurationError, CycleError, ResolutionError
from modjector.container.registry import Registry
from modjector.container.types import Strategy


class _Resolution:
    """State shared by every resolver touched during one top-level resolve.

    ``path`` holds the construction nodes currently being built, in order.
    Singletons created along the way are staged in ``pending`` together
    with the config that built them, and only committed once the whole
    resolve has succeeded.
    """

    __slots__ = ("path", "pending")

    def __init__(self) -> None:
        self.path: list[tuple[Resolver, DependencyConfig]] = []
        self.pending: dict[tuple[Resolver, str], tuple[DependencyConfig, Any]] = {}

    def enter(self, resolver: Resolver, config: DependencyConfig) -> None:
        for index, (seen_resolver, seen) in enumerate(self.path):
            if seen_resolver is resolver and seen.name == config.name:
                loop = self.path[index:]
                raise CycleError(
                    module=loop[0][1].belongs_to,
                    path=[node.name for _, node in loop] + [config.name],
                )
        self.path.append((resolver, config))

    def leave(self) -> None:
        self.path.pop()

    def commit(self) -> None:
        for (resolver, name), entry in self.pending.items():
            resolver._instances[name] = entry


class Resolver:
    """Produces run-time values for names registered in a :class:`Registry`.

    Configs imported from another module are resolved by the resolver of
    the injector that declared them, so their own dependencies are looked
    up in the namespace they came from.

    Cached singletons remember the config that built them; re-registering
    the name invalidates the cached instance.
    """

    def __init__(self, registry: Registry) -> None:
        self._registry = registry
        self._instances: dict[str, tuple[DependencyConfig, Any]] = {}

    def resolve(self, name: str) -> Any:
        """Resolve *name*, committing new singletons only if everything succeeds."""
        resolution = _Resolution()
        value = self._resolve_name(name, resolution)
        resolution.commit()
        return value

    def _resolve_name(
        self,
        name: str,
        resolution: _Resolution,
        required_by: str | None = None,
        aliases: tuple[DependencyConfig, ...] = (),
    ) -> Any:
        config = self._registry.get_config_of(name)
        if config is None:
            raise ResolutionError(
                name=name,
                module=self._registry.module_name,
                required_by=required_by,
                suggestions=difflib.get_close_matches(name, list(self._registry.dependencies), n=5, cutoff=0.6),
            )

        resolver = self
        if config.owner is not None and config.owner.resolver is not self:
            resolver = config.owner.resolver
        return resolver._resolve_config(config, resolution, aliases)

    def _resolve_config(
        self,
        config: DependencyConfig,
        resolution: _Resolution,
        aliases: tuple[DependencyConfig, ...],
    ) -> Any:
        strategy = config.strategy

        if strategy in (Strategy.VALUE, Strategy.CONSTANT):
            return config.value

        if strategy is Strategy.ALIAS:
            return self._resolve_alias(config, resolution, aliases)

        if strategy is Strategy.SINGLETON:
            for cached in (resolution.pending.get((self, config.name)), self._instances.get(config.name)):
                if cached is not None and cached[0] is config:
                    return cached[1]
            instance = self._construct(config, resolution)
            resolution.pending[(self, config.name)] = (config, instance)
            return instance

        if strategy is Strategy.FACTORY:
            return self._construct(config, resolution)

        # Providers are expanded by the registry and never stored.
        raise ConfigurationError(
            f"{config.belongs_to}: cannot resolve '{config.name}' with strategy {strategy.value!r}",
            name=config.name,
            module=config.belongs_to,
        )

    def _resolve_alias(
        self,
        config: DependencyConfig,
        resolution: _Resolution,
        aliases: tuple[DependencyConfig, ...],
    ) -> Any:
        for index, seen in enumerate(aliases):
            if seen.name == config.name and seen.owner is config.owner:
                loop = aliases[index:]
                raise CycleError(
                    module=loop[0].belongs_to,
                    path=[alias.name for alias in loop] + [config.name],
                )
        return self._resolve_name(
            config.value,
            resolution,
            required_by=config.name,
            aliases=aliases + (config,),
        )

    def _construct(self, config: DependencyConfig, resolution: _Resolution) -> Any:
        resolution.enter(self, config)
        try:
            args = [
                self._resolve_name(dependency, resolution, required_by=config.name)
                for dependency in config.dependency_names()
            ]
        finally:
            resolution.leave()
        return config.value(*args, *config.params)
