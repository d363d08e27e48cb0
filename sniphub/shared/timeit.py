from contextlib import contextmanager
from typing import Any, Iterator, MutableMapping, Optional, Tuple

from pynvim_pp.logging import log
from std2.locale import si_prefixed_smol
from std2.timeit import timeit as _timeit

from ..consts import DEBUG

_RECORDS: MutableMapping[str, Tuple[int, float]] = {}


def _fmt(name: str, delta: float, args: Tuple[Any, ...]) -> str:
    times, cum = _RECORDS.get(name, (0, 0.0))
    tt, c = times + 1, cum + delta
    _RECORDS[name] = tt, c

    time = f"{si_prefixed_smol(delta, precision=0)}s".ljust(8)
    avg = f"{si_prefixed_smol(c / tt, precision=0)}s".ljust(8)
    extra = " ".join(map(str, args))
    return f"TIME -- {name.ljust(30)} :: {time} @ {avg} #{tt} {extra}"


@contextmanager
def timeit(name: str, *args: Any, warn: Optional[float] = None) -> Iterator[None]:
    """
    Slow calls past `warn` seconds are logged even outside of debug mode
    """

    with _timeit() as t:
        yield None
    delta = t().total_seconds()

    if warn is not None and delta >= warn:
        log.warn("%s", _fmt(name, delta=delta, args=args))
    elif DEBUG:
        log.debug("%s", _fmt(name, delta=delta, args=args))
