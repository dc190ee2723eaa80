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
"""Injector — a module's registry paired with its resolver."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from modjector.container.dependency import DependencyConfig
from modjector.container.registry import Declaration, Registry
from modjector.container.resolver import Resolver


class Injector:
    """Dependency injection container for one named module.

    Not thread-safe: ``register`` and ``resolve`` must not be called
    concurrently on the same injector.
    """

    def __init__(self, name: str) -> None:
        self.name = name
        self._registry = Registry(name, owner=self)
        self._resolver = Resolver(self._registry)

    def __repr__(self) -> str:
        return f"Injector({self.name!r}, dependencies={len(self._registry)})"

    @property
    def resolver(self) -> Resolver:
        return self._resolver

    @property
    def dependencies(self) -> Mapping[str, DependencyConfig]:
        """Every registered config, own and imported."""
        return self._registry.dependencies

    def register(self, *configs: Declaration) -> None:
        """Register declarations; see :meth:`Registry.register`."""
        self._registry.register(*configs)

    def add_imports(self, exported: Mapping[str, Declaration]) -> None:
        """Merge another module's export map."""
        self._registry.add_imports(exported)

    def get_config_of(self, name: str) -> DependencyConfig | None:
        return self._registry.get_config_of(name)

    def contains(self, name: str) -> bool:
        """Check if a dependency is registered under *name*."""
        return name in self._registry

    def resolve(self, name: str) -> Any:
        """Resolve the run-time value registered under *name*."""
        return self._resolver.resolve(name)
