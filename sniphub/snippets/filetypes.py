from typing import Mapping, MutableSequence, Sequence

from ..shared.types import WILDCARD

_BUILTIN: Mapping[str, Sequence[str]] = {
    "javascript.jsx": ("javascriptreact",),
    "typescript.jsx": ("typescriptreact",),
    "typescript.tsx": ("typescriptreact",),
}


def filetypes(extends: Mapping[str, Sequence[str]], filetype: str) -> Sequence[str]:
    """
    `filetype` itself, each part of a compound `a.b` filetype, anything it
    `extends` (transitively), then the wildcard pool
    """

    acc: MutableSequence[str] = []

    def cont(ft: str) -> None:
        if ft and ft not in acc:
            acc.append(ft)
            if "." in ft:
                for part in ft.split("."):
                    cont(part)
            for alias in _BUILTIN.get(ft, ()):
                cont(alias)
            for ext in extends.get(ft, ()):
                cont(ext)

    cont(filetype)
    if WILDCARD not in acc:
        acc.append(WILDCARD)
    return acc
