"""Container types and enums."""

from enum import Enum


class Strategy(str, Enum):
    """Construction or retrieval policy bound to a registered name."""

    SINGLETON = "singleton"
    FACTORY = "factory"
    VALUE = "value"
    CONSTANT = "constant"
    ALIAS = "alias"
    PROVIDER = "provider"

