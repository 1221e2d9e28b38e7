import pytest

from orbitiq.config import DEFAULT_CORS_ORIGINS, N2YO_KEY_PLACEHOLDER, Settings

ENV_VARS = (
    "N2YO_API_KEY",
    "N2YO_BASE_URL",
    "CELESTRAK_BASE_URL",
    "OPEN_NOTIFY_URL",
    "POSITION_TIMEOUT",
    "TLE_TIMEOUT",
    "TLE_RETRY_TIMEOUT",
    "CELESTRAK_TIMEOUT",
    "GROUP_TIMEOUT",
    "PROBE_TIMEOUT",
    "TRENDING_TIMEOUT",
    "DESIGNATOR_TIMEOUT",
    "DESIGNATOR_TTL",
    "CORS_ORIGINS",
)


@pytest.fixture
def clean_env(monkeypatch):
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    return monkeypatch


class TestFromEnv:
    def test_defaults(self, clean_env):
        settings = Settings.from_env()
        assert settings == Settings()
        assert settings.cors_origins == DEFAULT_CORS_ORIGINS
        assert not settings.has_n2yo_key

    def test_timeouts_are_read(self, clean_env):
        clean_env.setenv("POSITION_TIMEOUT", "2.5")
        clean_env.setenv("PROBE_TIMEOUT", "4")
        clean_env.setenv("TRENDING_TIMEOUT", "1.5")
        clean_env.setenv("DESIGNATOR_TIMEOUT", "0.75")
        clean_env.setenv("DESIGNATOR_TTL", "60")

        settings = Settings.from_env()

        assert settings.position_timeout == 2.5
        assert settings.probe_timeout == 4.0
        assert settings.trending_timeout == 1.5
        assert settings.designator_timeout == 0.75
        assert settings.designator_ttl == 60.0

    def test_blank_value_keeps_default(self, clean_env):
        clean_env.setenv("PROBE_TIMEOUT", "  ")
        assert Settings.from_env().probe_timeout == Settings.probe_timeout

    def test_cors_origins_split(self, clean_env):
        clean_env.setenv("CORS_ORIGINS", "https://a.example, https://b.example,")
        assert Settings.from_env().cors_origins == ("https://a.example", "https://b.example")


class TestApiKey:
    @pytest.mark.parametrize("key, expected", [
        ("", False),
        (N2YO_KEY_PLACEHOLDER, False),
        ("short-key", False),
        ("ABCDE-FGHIJ-KLMNO-PQRS", True),
    ])
    def test_has_n2yo_key(self, key, expected):
        assert Settings(n2yo_api_key=key).has_n2yo_key is expected

    def test_key_is_stripped(self, clean_env):
        clean_env.setenv("N2YO_API_KEY", "  ABCDE-FGHIJ-KLMNO-PQRS \n")
        assert Settings.from_env().n2yo_api_key == "ABCDE-FGHIJ-KLMNO-PQRS"
