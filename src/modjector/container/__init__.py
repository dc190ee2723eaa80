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
"""Modjector Container — named dependency registry, resolver and modules."""

from modjector.container.decorators import inject
from modjector.container.dependency import DependencyConfig
from modjector.container.exceptions import (
    ConfigurationError,
    ContainerException,
    CycleError,
    NotBootstrappedError,
    ResolutionError,
)
from modjector.container.injector import Injector
from modjector.container.module import EXPORT_ALL, Module
from modjector.container.registry import Registry
from modjector.container.resolver import Resolver
from modjector.container.types import Strategy

__all__ = [
    "EXPORT_ALL",
    "ConfigurationError",
    "ContainerException",
    "CycleError",
    "DependencyConfig",
    "Injector",
    "Module",
    "NotBootstrappedError",
    "Registry",
    "ResolutionError",
    "Resolver",
    "Strategy",
    "inject",
]
