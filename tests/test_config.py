import pytest

from nclimgrid_api.config import DEFAULT_BBOX, DEFAULT_MAX_POINTS, Settings, load_settings

ENV_NAMES = [
    "NCLIMGRID_STAC_SEARCH_URL",
    "NCLIMGRID_SIGN_URL",
    "NCLIMGRID_COLLECTION",
    "NCLIMGRID_BBOX",
    "NCLIMGRID_MAX_POINTS",
    "NCLIMGRID_ASSET_KEY",
    "NCLIMGRID_HTTP_TIMEOUT_SECONDS",
    "NCLIMGRID_CORS_ORIGINS",
    "FRONTEND_URL",
]


@pytest.fixture(autouse=True)
def clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in ENV_NAMES:
        monkeypatch.delenv(name, raising=False)


def test_defaults_match_planetary_computer_deployment() -> None:
    settings = load_settings()

    assert settings == Settings()
    assert settings.collection == "noaa-nclimgrid-monthly"
    assert settings.bbox.as_list() == [-82.644739, 37.201483, -77.719519, 40.638801]
    assert settings.max_points == 10000
    assert settings.asset_key is None
    assert settings.cors_origins == ("http://localhost:5173",)


def test_environment_overrides(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("NCLIMGRID_STAC_SEARCH_URL", "https://stac.example.test/search")
    monkeypatch.setenv("NCLIMGRID_BBOX", "-1, -2, 3, 4")
    monkeypatch.setenv("NCLIMGRID_MAX_POINTS", "250")
    monkeypatch.setenv("NCLIMGRID_ASSET_KEY", "tavg")
    monkeypatch.setenv("NCLIMGRID_HTTP_TIMEOUT_SECONDS", "7.5")

    settings = load_settings()

    assert settings.stac_search_url == "https://stac.example.test/search"
    assert settings.bbox.as_list() == [-1.0, -2.0, 3.0, 4.0]
    assert settings.max_points == 250
    assert settings.asset_key == "tavg"
    assert settings.http_timeout_seconds == 7.5


@pytest.mark.parametrize("raw", ["1,2,3", "a,b,c,d", "5,0,1,1"])
def test_invalid_bbox_falls_back_to_default(monkeypatch: pytest.MonkeyPatch, raw: str) -> None:
    monkeypatch.setenv("NCLIMGRID_BBOX", raw)
    assert load_settings().bbox == DEFAULT_BBOX


@pytest.mark.parametrize("raw", ["0", "-5", "many"])
def test_invalid_max_points_falls_back_to_default(monkeypatch: pytest.MonkeyPatch, raw: str) -> None:
    monkeypatch.setenv("NCLIMGRID_MAX_POINTS", raw)
    assert load_settings().max_points == DEFAULT_MAX_POINTS


def test_frontend_url_is_added_to_cors_origins(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("NCLIMGRID_CORS_ORIGINS", "http://localhost:5173")
    monkeypatch.setenv("FRONTEND_URL", "https://maps.example.org")

    assert load_settings().cors_origins == ("http://localhost:5173", "https://maps.example.org")


def test_settings_are_immutable() -> None:
    settings = Settings()
    with pytest.raises(AttributeError):
        settings.max_points = 1  # type: ignore[misc]


def test_frontend_url_extends_default_cors_whitelist(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("FRONTEND_URL", "https://maps.example.org")

    origins = load_settings().cors_origins

    assert origins == ("http://localhost:5173", "https://maps.example.org")
    assert "*" not in origins
