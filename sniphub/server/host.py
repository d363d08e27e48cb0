from re import compile
from typing import (
    AbstractSet,
    Any,
    Callable,
    Iterator,
    Mapping,
    Optional,
    Sequence,
    Tuple,
)

from pynvim_pp.lib import encode
from pynvim_pp.nvim import Nvim
from pynvim_pp.text_object import is_word

from ..shared.types import SnippetEdit
from ..snippets.types import ContextError

_LEADING_NUM = compile(r"\s*[-+]?(?:0[xX]([0-9a-fA-F]+)|0[bB]([01]+)|(\d+))")


def truthy(val: Any) -> bool:
    """
    vimscript coerces strings to their leading number, `"abc"` is `0`
    """

    if isinstance(val, str):
        if m := _LEADING_NUM.match(val):
            digits = next(g for g in m.groups() if g is not None)
            return digits.strip("0") != ""
        else:
            return False
    else:
        return bool(val)


def word_classifier(unifying_chars: AbstractSet[str]) -> Callable[[str], bool]:
    return lambda chr: is_word(unifying_chars, chr=chr)


def complete_items(
    line: str, edits: Sequence[SnippetEdit]
) -> Tuple[int, Sequence[Mapping[str, Any]]]:
    """
    -> (1 based byte col, items) for `complete()`

    `complete()` takes one start col, later starting edits keep the text in between
    """

    begin = max(0, min(col for _, col in (edit.begin for edit in edits)))

    def cont() -> Iterator[Mapping[str, Any]]:
        for edit in edits:
            _, col = edit.begin
            word = line[begin : max(begin, col)] + edit.new_text
            yield {
                "word": word,
                "abbr": edit.prefix,
                "menu": edit.description,
                "info": edit.new_text,
                "dup": 1,
            }

    return len(encode(line[:begin])) + 1, tuple(cont())


class NvimValidator:
    async def check(self, context: str) -> bool:
        try:
            val = await Nvim.fn.eval(object, context)
        except Exception as e:
            raise ContextError(context) from e
        else:
            return truthy(val)


class NvimHost:
    async def input(self, question: str) -> Optional[str]:
        return await Nvim.input(question=question, default="")

    async def message(self, msg: str) -> None:
        await Nvim.write(msg)
