from typing import Callable, Mapping, Optional, Protocol, Sequence

from pynvim_pp.logging import log

from ..hub.types import NewSnippet, RemoteSnippet
from ..lang import LANG
from ..shared.types import SnippetEdit
from ..snippets.catalog import Catalog
from ..snippets.context import ContextValidator
from ..snippets.filetypes import filetypes
from ..snippets.matcher import trigger_snippets
from ..snippets.types import DuplicateSnippet


class Hub(Protocol):
    async def fetch_all(self) -> Sequence[RemoteSnippet]: ...

    async def create(self, new: NewSnippet) -> RemoteSnippet: ...


class Host(Protocol):
    async def input(self, question: str) -> Optional[str]: ...

    async def message(self, msg: str) -> None: ...


class Engine:
    def __init__(
        self,
        hub: Hub,
        validator: ContextValidator,
        extends: Mapping[str, Sequence[str]],
    ) -> None:
        self._hub, self._validator = hub, validator
        self._extends = extends
        self.catalog = Catalog()

    async def init(self) -> None:
        await self.catalog.refresh(self._hub)

    def filetypes(self, filetype: str) -> Sequence[str]:
        return filetypes(self._extends, filetype=filetype)

    def snippet_files(self, filetype: str) -> Sequence[str]:
        return self.catalog.locations({*self.filetypes(filetype)})

    async def trigger_snippets(
        self,
        is_word: Callable[[str], bool],
        filetype: str,
        row: int,
        col: int,
        line: str,
        auto: bool,
    ) -> Sequence[SnippetEdit]:
        snippets = self.catalog.filter_by_filetype({*self.filetypes(filetype)})
        return await trigger_snippets(
            self._validator,
            is_word=is_word,
            snippets=snippets,
            row=row,
            col=col,
            line=line,
            auto=auto,
        )

    async def create_snippet(
        self, host: Host, filetype: str, text: str
    ) -> Optional[RemoteSnippet]:
        name = await host.input(LANG("snippet name"))
        if not name:
            return None

        # refresh before the duplicate check
        await self.init()

        try:
            self.catalog.ensure_unique(name, filetype=filetype)
        except DuplicateSnippet as e:
            log.info("%s", e)
            await host.message(LANG("snippet exists", name=name))
            return None

        new = NewSnippet(content=text, name=name, public=True, language=filetype)
        created = await self._hub.create(new)
        self.catalog.append(created)
        await host.message(LANG("snippet created", name=name, filetype=filetype))
        return created
