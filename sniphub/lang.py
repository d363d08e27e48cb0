from locale import getlocale
from pathlib import Path
from string import Template
from typing import Iterator, Mapping, MutableMapping, Optional, Union

from pynvim_pp.lib import decode
from std2.pickle.decoder import new_decoder
from yaml import safe_load

from .consts import DEFAULT_LANG, LANG_ROOT

_DECODER = new_decoder[Mapping[str, str]](Mapping[str, str])


def _paths(code: Optional[str]) -> Iterator[Path]:
    yield (LANG_ROOT / DEFAULT_LANG).with_suffix(".yml")

    tag, _ = (code, None) if code else getlocale()
    primary, _, _ = (tag or DEFAULT_LANG).casefold().partition("-")
    lang, _, _ = primary.partition("_")
    path = (LANG_ROOT / lang).with_suffix(".yml")
    if lang != DEFAULT_LANG and path.exists():
        yield path


class _Lang:
    def __init__(self) -> None:
        self._specs: MutableMapping[str, Template] = {}

    def load(self, path: Path) -> None:
        specs = _DECODER(safe_load(decode(path.read_bytes())))
        self._specs.update((key, Template(val)) for key, val in specs.items())

    def __call__(self, key: str, **kwds: Union[int, float, str]) -> str:
        return self._specs[key].substitute(kwds)


LANG = _Lang()


def init(code: Optional[str]) -> None:
    # english first, so a partial translation still has every key
    for path in _paths(code):
        LANG.load(path)


init(None)
