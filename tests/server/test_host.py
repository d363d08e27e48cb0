from asyncio import run
from typing import Optional
from unittest import TestCase
from unittest.mock import AsyncMock, patch

from sniphub.server.host import NvimValidator, complete_items, truthy, word_classifier
from sniphub.shared.types import SnippetEdit
from sniphub.snippets.types import ContextError


def _edit(begin: int, end: int, new_text: str, prefix: str) -> SnippetEdit:
    return SnippetEdit(
        begin=(0, begin),
        end=(0, end),
        new_text=new_text,
        prefix=prefix,
        description=prefix,
        location="1",
        priority=0,
        regex=None,
        context=None,
    )


class Truthy(TestCase):
    def test_1(self) -> None:
        for val in (0, "", "0", None, (), False):
            self.assertFalse(truthy(val))

    def test_2(self) -> None:
        for val in (1, "1", (0,), True):
            self.assertTrue(truthy(val))

    def test_3(self) -> None:
        for val in ("abc", "0x", "00", " 0", "-0", "0x00", "x1"):
            self.assertFalse(truthy(val), val)

    def test_4(self) -> None:
        for val in ("1abc", " 2", "-3", "0x1f", "0b10", "007"):
            self.assertTrue(truthy(val), val)


class WordClassifier(TestCase):
    def test_1(self) -> None:
        is_word = word_classifier({"-"})
        self.assertTrue(is_word("a"))
        self.assertTrue(is_word("-"))
        self.assertFalse(is_word(" "))
        self.assertFalse(is_word("."))


class CompleteItems(TestCase):
    def test_1(self) -> None:
        edits = (_edit(4, 6, new_text="func() {}", prefix="fn"),)
        col, items = complete_items("    fn", edits=edits)
        self.assertEqual(col, 5)
        self.assertEqual([i["word"] for i in items], ["func() {}"])

    def test_2(self) -> None:
        line = "let xfn"
        edits = (
            _edit(5, 7, new_text="func() {}", prefix="fn"),
            _edit(4, 7, new_text="XFN", prefix="xfn"),
        )
        col, items = complete_items(line, edits=edits)
        self.assertEqual(col, 5)
        self.assertEqual([i["word"] for i in items], ["xfunc() {}", "XFN"])
        self.assertEqual([i["abbr"] for i in items], ["fn", "xfn"])

    def test_3(self) -> None:
        line = "é fn"
        edits = (_edit(2, 4, new_text="func", prefix="fn"),)
        col, _ = complete_items(line, edits=edits)
        self.assertEqual(col, 4)

    def test_4(self) -> None:
        edits = (_edit(-3, 2, new_text="long", prefix="long"),)
        col, items = complete_items("lo", edits=edits)
        self.assertEqual(col, 1)
        self.assertEqual([i["word"] for i in items], ["long"])


def _check(context: str, val: Optional[object], err: Optional[Exception]) -> bool:
    with patch("sniphub.server.host.Nvim") as nvim:
        nvim.fn.eval = AsyncMock(return_value=val, side_effect=err)
        return run(NvimValidator().check(context))


class Validator(TestCase):
    def test_1(self) -> None:
        self.assertTrue(_check("g:x", val="1", err=None))
        self.assertFalse(_check("g:x", val="abc", err=None))

    def test_2(self) -> None:
        with self.assertRaises(ContextError):
            _check("nope(", val=None, err=RuntimeError("E15"))
