from asyncio import get_running_loop
from asyncio.exceptions import CancelledError
from contextlib import suppress
from functools import wraps
from logging import DEBUG as DEBUG_LV
from logging import INFO
from pathlib import PurePath
from sys import exit
from typing import Any, Sequence, cast

from pynvim_pp.keymap import Keymap
from pynvim_pp.logging import log, suppress_and_log
from pynvim_pp.nvim import Nvim, conn
from pynvim_pp.rpc import MsgType
from pynvim_pp.types import Method, NoneType, RPCallable
from std2.pickle.types import DecodeError

from ._registry import ____
from .consts import DEBUG, SETTINGS_VAR
from .lang import LANG
from .registry import NAMESPACE, atomic, autocmd, rpc
from .server.registrants.snippets import _trigger_menu
from .server.rt_types import ConfigError, Stack
from .server.runtime import stack
from .shared.settings import KeyMapping

assert ____ or True

_CB = RPCallable[Any]


def _set_debug() -> None:
    loop = get_running_loop()
    loop.set_debug(DEBUG)
    log.setLevel(DEBUG_LV if DEBUG else INFO)


async def _default(msg: MsgType, method: Method, params: Sequence[Any]) -> None:
    with suppress_and_log():
        assert False, (msg, method, params)


def _trans(stack: Stack, handler: _CB) -> _CB:
    @wraps(handler)
    async def f(*params: Any) -> Any:
        with suppress(CancelledError):
            with suppress_and_log():
                return await handler(stack, *params)

    return cast(_CB, f)


async def _set_keymap(mapping: KeyMapping) -> None:
    keymap = Keymap()
    if mapping.trigger:
        _ = (
            keymap.i(mapping.trigger)
            << f"<cmd>lua {NAMESPACE}.{_trigger_menu.method}()<cr>"
        )
    await keymap.drain(buf=None).commit(NoneType)


async def init(socket: PurePath) -> None:
    _set_debug()

    async with conn(socket, default=_default) as client:
        try:
            stk = await stack()
        except (DecodeError, ConfigError) as e:
            msg = LANG("bad settings", var=SETTINGS_VAR, e=str(e))
            await Nvim.write(msg, error=True)
            exit(1)
        else:
            rpc_atomic, handlers = rpc.drain()
            for handler in handlers.values():
                hldr = _trans(stk, handler=handler)
                client.register(hldr)

            await (rpc_atomic + autocmd.drain() + atomic).commit(NoneType)
            await _set_keymap(stk.settings.keymap)
