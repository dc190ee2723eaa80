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
"""@inject — declare the dependency names a construction target needs."""

from __future__ import annotations

from collections.abc import Callable
from typing import Any, TypeVar

T = TypeVar("T", bound=Callable[..., Any])

INJECT_ATTR = "__modjector_inject__"


def inject(*names: str) -> Callable[[T], T]:
    """Tag a class or factory function with its ordered dependency names.

    The resolver passes the resolved values positionally, in the order given:

        @inject("Repository", "Clock")
        class OrderService:
            def __init__(self, repository, clock): ...
    """
    for name in names:
        if not isinstance(name, str):
            raise TypeError(f"@inject expects dependency names, got {name!r}")

    def decorator(target: T) -> T:
        setattr(target, INJECT_ATTR, tuple(names))
        return target

    return decorator


def injected_names(target: Any) -> tuple[str, ...]:
    """Return the names declared with @inject on *target*, or an empty tuple."""
    return tuple(getattr(target, INJECT_ATTR, ()))
