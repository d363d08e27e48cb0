from dataclasses import dataclass
from enum import Enum, auto
from re import Pattern as RePattern
from typing import Optional, Tuple, Union

WILDCARD = "all"

# (row, col), col counted in characters, not bytes
CharPos = Tuple[int, int]


class TriggerKind(Enum):
    in_word = auto()
    line_begin = auto()
    space_before = auto()
    word_boundary = auto()


@dataclass(frozen=True)
class Literal:
    prefix: str


@dataclass(frozen=True)
class Pattern:
    regex: RePattern
    origin: str


Detector = Union[Literal, Pattern]


@dataclass(frozen=True)
class Snippet:
    location: str
    lnum: int
    prefix: str
    detector: Detector
    body: str
    description: str
    trigger_kind: TriggerKind
    filetype: str

    auto_trigger: bool = False
    context: Optional[str] = None
    priority: int = 0


@dataclass(frozen=True)
class SnippetEdit:
    """
    End exclusive, same row

    |...<pre>[begin<trigger>end]🐭...|
    """

    begin: CharPos
    end: CharPos
    new_text: str
    prefix: str
    description: str
    location: str
    priority: int
    regex: Optional[str]
    context: Optional[str]
