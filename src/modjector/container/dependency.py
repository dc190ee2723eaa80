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
"""Dependency declaration metadata."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

from modjector.container.decorators import injected_names
from modjector.container.types import Strategy

if TYPE_CHECKING:
    from modjector.container.injector import Injector

_FIELDS = ("name", "strategy", "value", "belongs_to", "params", "dependencies")


@dataclass(frozen=True)
class DependencyConfig:
    """Passive descriptor of one named dependency.

    ``strategy`` may be given as a plain string; the registry validates and
    normalises it. ``owner`` is filled in when the config is stored and
    points at the injector that declared it.
    """

    name: str
    strategy: Strategy | str
    value: Any = None
    belongs_to: str | None = None
    params: tuple[Any, ...] = ()
    dependencies: tuple[str, ...] | None = None
    owner: Injector | None = field(default=None, repr=False, compare=False)

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> DependencyConfig:
        """Build a config from its dict form, ignoring unknown keys."""
        kwargs = {key: data[key] for key in _FIELDS if key in data}
        kwargs.setdefault("name", "")
        kwargs.setdefault("strategy", "")
        if "params" in kwargs:
            kwargs["params"] = _as_tuple(kwargs["params"])
        if kwargs.get("dependencies") is not None:
            kwargs["dependencies"] = tuple(kwargs["dependencies"])
        return cls(**kwargs)

    def dependency_names(self) -> tuple[str, ...]:
        """Names to resolve before calling ``value``; explicit wins over @inject."""
        if self.dependencies is not None:
            return tuple(self.dependencies)
        return injected_names(self.value)


def _as_tuple(params: Any) -> tuple[Any, ...]:
    if params is None:
        return ()
    if isinstance(params, (list, tuple)):
        return tuple(params)
    return (params,)
