from unittest import TestCase

from sniphub.snippets.filetypes import filetypes


class Filetypes(TestCase):
    def test_1(self) -> None:
        self.assertEqual(filetypes({}, filetype="go"), ["go", "all"])

    def test_2(self) -> None:
        fts = filetypes({}, filetype="")
        self.assertEqual(fts, ["all"])

    def test_3(self) -> None:
        fts = filetypes({}, filetype="javascript.jsx")
        self.assertEqual(
            fts, ["javascript.jsx", "javascript", "jsx", "javascriptreact", "all"]
        )

    def test_4(self) -> None:
        extends = {"typescriptreact": ["typescript"], "typescript": ["javascript"]}
        fts = filetypes(extends, filetype="typescriptreact")
        self.assertEqual(fts, ["typescriptreact", "typescript", "javascript", "all"])

    def test_5(self) -> None:
        extends = {"a": ["b"], "b": ["a"]}
        self.assertEqual(filetypes(extends, filetype="a"), ["a", "b", "all"])

    def test_6(self) -> None:
        self.assertEqual(filetypes({}, filetype="all"), ["all"])
