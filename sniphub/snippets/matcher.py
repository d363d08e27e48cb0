from re import compile, error
from typing import (
    Callable,
    Iterable,
    Iterator,
    MutableSequence,
    Optional,
    Sequence,
    Tuple,
)

from std2.types import never

from ..shared.types import Literal, Pattern, Snippet, SnippetEdit, TriggerKind
from .context import ContextValidator
from .types import MatchError

IsWord = Callable[[str], bool]


def compile_pattern(origin: str) -> Pattern:
    try:
        regex = compile(origin)
    except error as e:
        raise MatchError(origin) from e
    else:
        return Pattern(regex=regex, origin=origin)


def matched(snippet: Snippet, line: str, col: int) -> Optional[Tuple[str, str]]:
    """
    -> (pre, trigger)

    Patterns search the whole line, literals only look behind the cursor
    """

    detector = snippet.detector
    if isinstance(detector, Pattern):
        if m := detector.regex.search(line):
            return line[: m.start()], m.group()
        else:
            return None
    elif isinstance(detector, Literal):
        before = line[:col]
        if before.endswith(detector.prefix):
            return before[: len(before) - len(detector.prefix)], detector.prefix
        else:
            return None
    else:
        never(detector)


def eligible(is_word: IsWord, kind: TriggerKind, pre: str) -> bool:
    if kind is TriggerKind.in_word:
        return True
    elif kind is TriggerKind.line_begin:
        return pre.strip() == ""
    elif kind is TriggerKind.space_before:
        return not pre or pre[-1].isspace()
    elif kind is TriggerKind.word_boundary:
        return not pre or not is_word(pre[-1])
    else:
        never(kind)


def candidates(
    is_word: IsWord, snippets: Iterable[Snippet], line: str, col: int, auto: bool
) -> Sequence[Tuple[Snippet, str]]:
    def cont() -> Iterator[Tuple[Snippet, str]]:
        for snippet in snippets:
            if auto and not snippet.auto_trigger:
                continue
            elif m := matched(snippet, line=line, col=col):
                pre, trigger = m
                if eligible(is_word, kind=snippet.trigger_kind, pre=pre):
                    yield snippet, trigger

    # `sorted` is stable, context carrying snippets go first
    return sorted(cont(), key=lambda c: not c[0].context)


def _edit(row: int, col: int, snippet: Snippet, trigger: str) -> SnippetEdit:
    detector = snippet.detector
    edit = SnippetEdit(
        begin=(row, col - len(trigger)),
        end=(row, col),
        new_text=snippet.body,
        prefix=snippet.prefix,
        description=snippet.description,
        location=snippet.location,
        priority=snippet.priority,
        regex=detector.origin if isinstance(detector, Pattern) else None,
        context=snippet.context,
    )
    return edit


async def trigger_snippets(
    validator: ContextValidator,
    is_word: IsWord,
    snippets: Iterable[Snippet],
    row: int,
    col: int,
    line: str,
    auto: bool,
) -> Sequence[SnippetEdit]:
    if not line or auto:
        return ()

    edits: MutableSequence[SnippetEdit] = []
    has_context = False
    for snippet, trigger in candidates(
        is_word, snippets=snippets, line=line, col=col, auto=auto
    ):
        if snippet.context:
            # checked one at a time, in order
            if not await validator.check(snippet.context):
                continue
            has_context = True
        elif has_context:
            break

        edits.append(_edit(row, col=col, snippet=snippet, trigger=trigger))

    return edits
