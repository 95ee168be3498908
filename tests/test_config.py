from __future__ import annotations

import pytest

from iftarloc.config import LocatorConfig
from iftarloc.exceptions import LocatorConfigError


def test_defaults_target_uae() -> None:
    config = LocatorConfig()
    assert config.bbox == (51.5, 22.6, 56.4, 26.1)
    assert config.search_limit == 5
    assert config.debounce_delay == 0.3
    assert config.min_query_length == 2
    assert config.max_address_length == 300
    assert config.gps_timeout == 10.0
    assert config.gps_maximum_age == 0.0
    assert config.user_agent.startswith("IftarInUAE/1.0")
    assert config.discard_stale_results is False


def test_from_env_reads_variables(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("IFTARLOC_PHOTON_URL", "http://localhost:2322/api")
    monkeypatch.setenv("IFTARLOC_SEARCH_LIMIT", "3")
    monkeypatch.setenv("IFTARLOC_DEBOUNCE_DELAY", "0.5")
    monkeypatch.setenv("IFTARLOC_BBOX", "55.0, 24.9, 55.6, 25.4")
    monkeypatch.setenv("IFTARLOC_DISCARD_STALE_RESULTS", "yes")
    monkeypatch.setenv("IFTARLOC_GPS_HIGH_ACCURACY", "off")

    config = LocatorConfig.from_env()

    assert config.photon_url == "http://localhost:2322/api"
    assert config.search_limit == 3
    assert config.debounce_delay == 0.5
    assert config.bbox == (55.0, 24.9, 55.6, 25.4)
    assert config.discard_stale_results is True
    assert config.gps_high_accuracy is False


def test_from_env_overrides_win(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("IFTARLOC_SEARCH_LIMIT", "3")
    monkeypatch.setenv("IFTARLOC_DISCARD_STALE_RESULTS", "1")

    config = LocatorConfig.from_env(search_limit=4, discard_stale_results=False)

    assert config.search_limit == 4
    assert config.discard_stale_results is False


def test_from_env_rejects_bad_numbers(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("IFTARLOC_GPS_TIMEOUT", "soon")
    with pytest.raises(LocatorConfigError, match="IFTARLOC_GPS_TIMEOUT"):
        LocatorConfig.from_env()


@pytest.mark.parametrize("bbox", ["1,2,3", "a,b,c,d"])
def test_from_env_rejects_bad_bbox(monkeypatch: pytest.MonkeyPatch, bbox: str) -> None:
    monkeypatch.setenv("IFTARLOC_BBOX", bbox)
    with pytest.raises(LocatorConfigError):
        LocatorConfig.from_env()


@pytest.mark.parametrize(
    "kwargs",
    [{"search_limit": 0}, {"debounce_delay": -1.0}, {"max_address_length": 0}, {"gps_timeout": 0.0}],
)
def test_invalid_values_rejected(kwargs: dict[str, object]) -> None:
    with pytest.raises(LocatorConfigError):
        LocatorConfig(**kwargs)  # type: ignore[arg-type]
