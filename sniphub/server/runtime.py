from typing import Any, cast

from pynvim_pp.lib import decode
from pynvim_pp.nvim import Nvim
from pynvim_pp.types import NoneType
from std2.configparser import hydrate
from std2.graphlib import merge
from std2.pickle.decoder import new_decoder
from yaml import safe_load

from ..consts import CONFIG_YML, SETTINGS_VAR
from ..hub.client import HubClient
from ..shared.settings import Settings
from .engine import Engine
from .host import NvimValidator
from .rt_types import ConfigError, Stack


def load_settings(yml: Any, user_config: Any) -> Settings:
    merged = merge(yml, hydrate(user_config), replace=True)
    settings = new_decoder[Settings](Settings)(merged)

    if not settings.hub.api_url:
        raise ConfigError("hub.api_url is required")
    if settings.limits.timeout is not None and settings.limits.timeout <= 0:
        raise ConfigError("limits.timeout <= 0")

    return settings


async def _settings() -> Settings:
    yml = safe_load(decode(CONFIG_YML.read_bytes()))
    user_config = cast(Any, (await Nvim.vars.get(NoneType, SETTINGS_VAR)) or {})
    return load_settings(yml, user_config=user_config)


async def stack() -> Stack:
    settings = await _settings()
    hub = HubClient(settings.hub, timeout=settings.limits.timeout)
    engine = Engine(hub, validator=NvimValidator(), extends=settings.extends)
    return Stack(settings=settings, engine=engine)
