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
"""Container exceptions — fatal errors during registration and resolution."""

from __future__ import annotations

from collections.abc import Sequence

from modjector.kernel.exceptions import ModjectorException


class ContainerException(ModjectorException):
    """Base for every error raised by the injector."""


class ConfigurationError(ContainerException):
    """A declaration was rejected at registration time.

    Raised for unknown strategies, redefinition of a constant, and
    providers that produce another provider.
    """

    def __init__(self, message: str, *, name: str | None = None, module: str | None = None) -> None:
        self.name = name
        self.module = module
        super().__init__(
            message,
            code="CONTAINER_CONFIGURATION",
            context={"name": name, "module": module},
        )


class ResolutionError(ContainerException):
    """No dependency is registered under the requested name."""

    def __init__(
        self,
        *,
        name: str,
        module: str | None = None,
        required_by: str | None = None,
        suggestions: list[str] | None = None,
    ) -> None:
        self.name = name
        self.module = module
        self.required_by = required_by
        self.suggestions = suggestions or []

        headline = f"No dependency named '{name}' is registered"
        if module:
            headline = f"{module}: {headline}"

        lines = [headline]
        if required_by:
            lines.append(f"  Required by: {required_by}")
        if self.suggestions:
            lines.append(f"  Similar registered names: {', '.join(self.suggestions)}")

        super().__init__(
            "\n".join(lines),
            code="CONTAINER_RESOLUTION",
            context={"name": name, "module": module, "required_by": required_by},
        )


class CycleError(ContainerException):
    """A resolution revisited a node that is still on the active path.

    ``path`` is the minimal loop, first name repeated at the end.
    ``module`` is the module that declared the entry point of the loop.
    """

    def __init__(self, *, module: str | None, path: Sequence[str]) -> None:
        self.module = module
        self.path = list(path)

        chain = " -> ".join(self.path)
        message = f"{module}: {chain}" if module else chain
        super().__init__(
            message,
            code="CONTAINER_CYCLE",
            context={"module": module, "path": self.path},
        )


class NotBootstrappedError(ContainerException):
    """The application was used before a root module was bootstrapped."""

    def __init__(self, operation: str) -> None:
        self.operation = operation
        super().__init__(
            f"{operation} requires a root module; call bootstrap() first",
            code="APPLICATION_NOT_BOOTSTRAPPED",
            context={"operation": operation},
        )
