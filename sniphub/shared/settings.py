from dataclasses import dataclass
from typing import AbstractSet, Mapping, Optional, Sequence


@dataclass(frozen=True)
class Limits:
    timeout: Optional[float]


@dataclass(frozen=True)
class HubOptions:
    api_url: str
    api_token: Optional[str]


@dataclass(frozen=True)
class MatchOptions:
    unifying_chars: AbstractSet[str]


@dataclass(frozen=True)
class KeyMapping:
    trigger: Optional[str]


@dataclass(frozen=True)
class Settings:
    hub: HubOptions
    limits: Limits
    match: MatchOptions
    keymap: KeyMapping
    extends: Mapping[str, Sequence[str]]
