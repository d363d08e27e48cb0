from json import JSONDecodeError, dumps, loads
from typing import Any, Mapping, MutableMapping, Optional, Sequence
from urllib.error import HTTPError, URLError
from urllib.request import Request

from pynvim_pp.lib import decode, encode
from pynvim_pp.logging import log
from std2.asyncio import to_thread
from std2.pickle.decoder import new_decoder
from std2.pickle.encoder import new_encoder
from std2.pickle.types import DecodeError
from std2.urllib import urlopen

from ..consts import SNIPPETS_PATH
from ..shared.settings import HubOptions
from ..shared.timeit import timeit
from .types import Listing, NewSnippet, ParseError, RemoteSnippet, TransportError

_LISTING = new_decoder[Listing](Listing, strict=False)
_RECORD = new_decoder[RemoteSnippet](RemoteSnippet, strict=False)
_NEW = new_encoder[NewSnippet](NewSnippet)

_WARN_AFTER = 2.0


def _parse(raw: bytes) -> Any:
    try:
        return loads(decode(raw))
    except (UnicodeDecodeError, JSONDecodeError) as e:
        raise ParseError(e) from e


def _call(req: Request, timeout: Optional[float]) -> bytes:
    try:
        with urlopen(req, timeout=timeout) as resp:
            status = resp.status
            if status < 200 or status >= 300:
                raise TransportError(f"statusCode={status}")
            else:
                return resp.read()
    except HTTPError as e:
        raise TransportError(f"statusCode={e.code}") from e
    except (URLError, OSError) as e:
        raise TransportError(e) from e


class HubClient:
    """
    GET / POST `{api_url}/snippets`, one round trip each, no retries
    """

    def __init__(self, options: HubOptions, timeout: Optional[float]) -> None:
        self._options, self._timeout = options, timeout
        self._uri = options.api_url.rstrip("/") + SNIPPETS_PATH

    def _headers(self, extra: Mapping[str, str]) -> Mapping[str, str]:
        headers: MutableMapping[str, str] = {**extra}
        if self._options.api_token:
            headers["Authorization"] = f"Bearer {self._options.api_token}"
        return headers

    async def fetch_all(self) -> Sequence[RemoteSnippet]:
        log.debug("%s", f"GET {self._uri}")
        req = Request(self._uri, headers=self._headers({}), method="GET")

        with timeit("FETCH SNIPPETS", self._uri, warn=_WARN_AFTER):
            raw = await to_thread(lambda: _call(req, timeout=self._timeout))

        json = _parse(raw)
        try:
            listing = _LISTING(json)
        except DecodeError as e:
            raise ParseError(e) from e
        else:
            return listing.snippets

    async def create(self, new: NewSnippet) -> RemoteSnippet:
        body = encode(dumps(_NEW(new), ensure_ascii=False))
        headers = self._headers(
            {
                "Accept": "application/json",
                "Content-Type": "application/json",
                "Content-Length": str(len(body)),
            }
        )
        log.debug("%s", f"POST {self._uri} -- {new.language}/{new.name}")
        req = Request(self._uri, data=body, headers=headers, method="POST")

        with timeit("CREATE SNIPPET", self._uri, warn=_WARN_AFTER):
            raw = await to_thread(lambda: _call(req, timeout=self._timeout))

        json = _parse(raw)
        try:
            return _RECORD(json)
        except DecodeError as e:
            raise ParseError(e) from e
