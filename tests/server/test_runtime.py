from unittest import TestCase

from yaml import safe_load

from sniphub.consts import CONFIG_YML
from sniphub.server.rt_types import ConfigError
from sniphub.server.runtime import load_settings


def _defaults() -> object:
    return safe_load(CONFIG_YML.read_text("UTF-8"))


class LoadSettings(TestCase):
    def test_1(self) -> None:
        user = {"hub": {"api_url": "https://hub.test", "api_token": "secret"}}
        settings = load_settings(_defaults(), user_config=user)
        self.assertEqual(settings.hub.api_url, "https://hub.test")
        self.assertEqual(settings.hub.api_token, "secret")
        self.assertIsNone(settings.limits.timeout)
        self.assertIn("_", settings.match.unifying_chars)
        self.assertEqual(tuple(settings.extends["typescriptreact"]), ("typescript",))

    def test_2(self) -> None:
        with self.assertRaises(ConfigError):
            load_settings(_defaults(), user_config={})

    def test_3(self) -> None:
        user = {"hub": {"api_url": "https://hub.test"}, "limits": {"timeout": 0.0}}
        with self.assertRaises(ConfigError):
            load_settings(_defaults(), user_config=user)
