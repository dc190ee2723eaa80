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
"""Controller/action references used in route and middleware registration."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class Action:
    """Points a route or middleware at a method of a container-managed controller.

    ``controller`` is the dependency name, ``action`` the method called on the
    resolved instance and ``params`` an opaque value passed as its last argument.
    """

    controller: str
    action: str
    params: Any = None

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> Action:
        return cls(
            controller=data["controller"],
            action=data["action"],
            params=data.get("params"),
        )


def as_action(target: Any) -> Action | None:
    """Return *target* as an :class:`Action` when it describes one."""
    if isinstance(target, Action):
        return target
    if isinstance(target, Mapping) and "controller" in target and "action" in target:
        return Action.from_mapping(target)
    return None
