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
"""Starlette adapter — resolves route and middleware targets from the container.

After :func:`starlette_di` runs, ``app.add_route``, ``app.add_middleware``
and (optionally) ``router.add_route`` accept, in place of a callable:

- a dependency name, replaced by ``resolve(name)``;
- an :class:`Action` (or ``{"controller", "action", "params"}`` dict), replaced
  by an adapter calling ``controller.action(request, params)`` for routes and
  ``controller.action(request, call_next, params)`` for middleware.

Extra ``add_middleware`` arguments given with a non-class middleware are
passed to it on every call, after ``call_next`` (and ``params``).

Anything else passes through unchanged. Controllers are resolved once, at
registration time, so wiring errors surface while the app is assembled.
"""

from __future__ import annotations

import inspect
from collections.abc import Callable, Mapping
from pathlib import Path
from typing import Any

import structlog
from starlette.applications import Starlette
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response
from starlette.routing import Router

from modjector.container.dependency import DependencyConfig
from modjector.container.exceptions import ConfigurationError, ContainerException
from modjector.container.module import Module
from modjector.container.types import Strategy
from modjector.core.application import Application
from modjector.core.config import Config
from modjector.web.action import Action, as_action

logger = structlog.get_logger("modjector.web")

APP_DEPENDENCY = "App"


def starlette_di(
    bootstrap_module: Module | Mapping[str, Any],
    app: Starlette,
    router: Router | None = None,
    config: Config | str | Path | None = None,
) -> Application:
    """Bootstrap *bootstrap_module* and wire its injector into *app*.

    The Starlette app is registered as the constant ``App`` in the root
    module and the :class:`Application` is stored on ``app.state.di``.
    """
    di = Application(config)
    di.bootstrap(bootstrap_module)
    di.main.injector.register(DependencyConfig(name=APP_DEPENDENCY, strategy=Strategy.CONSTANT, value=app))
    app.state.di = di

    app.add_route = _route_resolver(di, app.add_route)  # type: ignore[method-assign]
    app.add_middleware = _middleware_resolver(di, app.add_middleware)  # type: ignore[method-assign]
    if router is not None:
        router.add_route = _route_resolver(di, router.add_route)  # type: ignore[method-assign]

    return di


def _route_resolver(di: Application, original: Callable[..., None]) -> Callable[..., None]:
    def add_route(path: str, route: Any, *args: Any, **kwargs: Any) -> None:
        original(path, _endpoint(di, path, route), *args, **kwargs)

    return add_route


def _middleware_resolver(di: Application, original: Callable[..., None]) -> Callable[..., None]:
    def add_middleware(middleware: Any, *args: Any, **kwargs: Any) -> None:
        if inspect.isclass(middleware):
            original(middleware, *args, **kwargs)
            return
        original(BaseHTTPMiddleware, dispatch=_dispatch(di, middleware, args, kwargs))

    return add_middleware


def _endpoint(di: Application, path: str, target: Any) -> Any:
    if isinstance(target, str):
        return _resolve(di, target, path)

    action = as_action(target)
    if action is None:
        return target

    handler = _handler(di, action, path)

    async def endpoint(request: Request) -> Response:
        return await _maybe_await(handler(request, action.params))

    return endpoint


def _dispatch(
    di: Application,
    target: Any,
    args: tuple[Any, ...] = (),
    kwargs: Mapping[str, Any] | None = None,
) -> Callable[..., Any]:
    extra = dict(kwargs or {})
    action = as_action(target)
    if action is not None:
        handler = _handler(di, action, "<middleware>")

        async def dispatch_action(request: Request, call_next: Callable[..., Any]) -> Response:
            return await _maybe_await(handler(request, call_next, action.params, *args, **extra))

        return dispatch_action

    middleware = _resolve(di, target, "<middleware>") if isinstance(target, str) else target
    if not callable(middleware):
        raise ConfigurationError(f"Middleware {target!r} is not callable")

    async def dispatch(request: Request, call_next: Callable[..., Any]) -> Response:
        return await _maybe_await(middleware(request, call_next, *args, **extra))

    return dispatch


def _handler(di: Application, action: Action, path: str) -> Callable[..., Any]:
    controller = _resolve(di, action.controller, path)
    handler = getattr(controller, action.action, None)
    if not callable(handler):
        raise ConfigurationError(
            f"Controller '{action.controller}' has no callable action '{action.action}'",
            name=action.controller,
        )
    return handler


def _resolve(di: Application, name: str, path: str) -> Any:
    try:
        resolved = di.resolve(name)
    except ContainerException as exc:
        logger.error("route_resolution_failed", path=path, dependency=name, error=str(exc))
        raise
    logger.debug("route_target_resolved", path=path, dependency=name)
    return resolved


async def _maybe_await(result: Any) -> Any:
    if inspect.isawaitable(result):
        return await result
    return result
