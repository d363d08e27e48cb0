from dataclasses import dataclass

from ..shared.settings import Settings
from .engine import Engine


class ConfigError(Exception): ...


@dataclass(frozen=True)
class Stack:
    settings: Settings
    engine: Engine
