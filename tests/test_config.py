from osuv1.core.config import Settings


def test_defaults(monkeypatch):
    for key in ("OSU_API_KEY", "OSU_API_TIMEOUT", "OSU_RATE_LIMIT_CALLS", "OSU_CACHE_DURATION"):
        monkeypatch.delenv(key, raising=False)

    settings = Settings(_env_file=None)

    assert settings.OSU_API_BASE_URL == "https://osu.ppy.sh/api/"
    assert settings.OSU_API_TIMEOUT == 10.0
    assert settings.OSU_RATE_LIMIT_CALLS == 15
    assert settings.OSU_RATE_LIMIT_PERIOD == 1.0
    assert settings.OSU_CACHE_DURATION == 300


def test_environment_overrides(monkeypatch):
    monkeypatch.setenv("OSU_API_KEY", "secret")
    monkeypatch.setenv("OSU_RATE_LIMIT_CALLS", "30")
    monkeypatch.setenv("OSU_METRICS_ENABLED", "true")

    settings = Settings(_env_file=None)

    assert settings.OSU_API_KEY == "secret"
    assert settings.OSU_RATE_LIMIT_CALLS == 30
    assert settings.OSU_METRICS_ENABLED is True
