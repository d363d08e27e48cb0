from dataclasses import dataclass
from typing import Sequence, Union


class TransportError(Exception): ...


class ParseError(Exception): ...


@dataclass(frozen=True)
class RemoteSnippet:
    id: Union[str, int]
    name: str
    content: str
    language: str
    public: bool = True
    created_at: str = ""
    updated_at: str = ""


@dataclass(frozen=True)
class Listing:
    snippets: Sequence[RemoteSnippet]


@dataclass(frozen=True)
class NewSnippet:
    content: str
    name: str
    public: bool
    language: str
