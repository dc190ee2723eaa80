"""Starlette adapter for container-resolved routes and middleware."""

from modjector.web.adapters.starlette.adapter import APP_DEPENDENCY, starlette_di

__all__ = ["APP_DEPENDENCY", "starlette_di"]
