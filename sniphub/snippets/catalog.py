from itertools import count
from typing import AbstractSet, Iterable, Iterator, MutableSequence, Protocol, Sequence

from pynvim_pp.logging import log

from ..hub.types import RemoteSnippet
from ..shared.types import Literal, Snippet, TriggerKind
from .types import DuplicateSnippet


class SnippetSource(Protocol):
    async def fetch_all(self) -> Sequence[RemoteSnippet]: ...


def to_snippet(lnum: int, item: RemoteSnippet) -> Snippet:
    return Snippet(
        location=str(item.id),
        lnum=lnum,
        prefix=item.name,
        detector=Literal(prefix=item.name),
        body=item.content,
        description=item.name,
        trigger_kind=TriggerKind.word_boundary,
        filetype=item.language,
    )


def convert(items: Iterable[RemoteSnippet], start: int = 0) -> Iterator[Snippet]:
    for lnum, item in zip(count(start), items):
        yield to_snippet(lnum, item=item)


class Catalog:
    """
    Owned by one engine, rebuilt whole on `replace_all`, grown by `append`
    """

    def __init__(self) -> None:
        self._snippets: MutableSequence[Snippet] = []

    def __len__(self) -> int:
        return len(self._snippets)

    def __iter__(self) -> Iterator[Snippet]:
        return iter(tuple(self._snippets))

    def replace_all(self, items: Iterable[RemoteSnippet]) -> None:
        snippets = [*convert(items)]
        self._snippets = snippets

    async def refresh(self, source: SnippetSource) -> None:
        # fetch first, swap after -- a failed fetch leaves the old set in place
        items = await source.fetch_all()
        self.replace_all(items)
        log.info("%s", f"loaded {len(self._snippets)} snippets")

    def append(self, item: RemoteSnippet) -> Snippet:
        snippet = to_snippet(len(self._snippets), item=item)
        self._snippets.append(snippet)
        return snippet

    def filter_by_filetype(self, filetypes: AbstractSet[str]) -> Sequence[Snippet]:
        return tuple(s for s in self._snippets if s.filetype in filetypes)

    def locations(self, filetypes: AbstractSet[str]) -> Sequence[str]:
        return tuple(s.location for s in self.filter_by_filetype(filetypes))

    def ensure_unique(self, name: str, filetype: str) -> None:
        for snippet in self._snippets:
            if snippet.prefix == name and snippet.filetype == filetype:
                raise DuplicateSnippet(name, filetype=filetype)
