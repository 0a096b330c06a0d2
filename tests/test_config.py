from pathlib import Path

import pytest

from coastfinder import SearchConfig, ServerSettings, get_search_config, set_search_config, tier_path


def test_defaults_are_valid():
    config = SearchConfig()
    assert config.validate() == []
    assert (config.min_zoom, config.max_zoom) == (3.0, 10.0)
    assert (config.canvas_width, config.canvas_height) == (600, 520)
    assert config.inset_ratio == 0.05
    assert config.min_intersections == 2
    assert config.max_attempts == 100
    assert config.fallback.center == (-73.9857, 40.7484)


@pytest.mark.parametrize(
    "overrides, fragment",
    [
        ({"min_zoom": 11.0}, "min_zoom"),
        ({"canvas_width": 0}, "canvas"),
        ({"inset_ratio": 1.0}, "inset_ratio"),
        ({"min_intersections": 5}, "min_intersections"),
        ({"max_attempts": 0}, "max_attempts"),
    ],
)
def test_validation_reports_problems(overrides, fragment):
    errors = SearchConfig(**overrides).validate()
    assert any(fragment in error for error in errors)


def test_global_config_is_copied():
    original = get_search_config()
    try:
        copy = get_search_config()
        copy.max_attempts = 3
        assert get_search_config().max_attempts == original.max_attempts

        set_search_config(SearchConfig(max_attempts=7))
        assert get_search_config().max_attempts == 7
    finally:
        set_search_config(original)


def test_set_rejects_invalid_config():
    with pytest.raises(ValueError):
        set_search_config(SearchConfig(max_attempts=-1))


def test_tier_paths():
    assert tier_path("mid") == Path("public") / "coast50.geojson"
    assert tier_path("low", Path("/data")) == Path("/data/coast110.geojson")
    with pytest.raises(ValueError):
        tier_path("ultra")


def test_server_settings_from_env():
    settings = ServerSettings.from_env({"PORT": "8080", "COASTFINDER_DATA": "/srv/coast.geojson"})
    assert settings.port == 8080
    assert settings.data_path == Path("/srv/coast.geojson")
    assert settings.host == "0.0.0.0"

    defaults = ServerSettings.from_env({})
    assert defaults.port == 3000
    assert defaults.data_path == Path("public") / "coast50.geojson"

    with pytest.raises(ValueError):
        ServerSettings.from_env({"PORT": "http"})
