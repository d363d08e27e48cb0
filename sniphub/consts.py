from os import environ
from pathlib import Path

TOP_LEVEL = Path(__file__).resolve().parent.parent

_CONF_DIR = TOP_LEVEL / "config"
LANG_ROOT = TOP_LEVEL / "locale"
DEFAULT_LANG = "en"

CONFIG_YML = _CONF_DIR / "defaults.yml"

SETTINGS_VAR = "sniphub_settings"

SNIPPETS_PATH = "/snippets"

DEBUG = "SNIPHUB_DEBUG" in environ
