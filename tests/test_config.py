import pytest

from ognfeed.config import DEFAULT_FILTER, Settings, _get_bool, parse_aircraft_types
from ognfeed.domain import AircraftType
from ognfeed.ingestors import build_feed_config


def test_parse_aircraft_types():
    assert parse_aircraft_types("Paraglider") == (AircraftType.PARAGLIDER,)
    assert parse_aircraft_types("paraglider, hangglider") == (
        AircraftType.PARAGLIDER,
        AircraftType.HANGGLIDER,
    )
    assert parse_aircraft_types("*") == ()


@pytest.mark.parametrize("value", ["", " , ", "Paraglider,Zeppelin"])
def test_parse_aircraft_types_rejects_bad_values(value):
    with pytest.raises(ValueError):
        parse_aircraft_types(value)


def test_get_bool(monkeypatch):
    monkeypatch.delenv("OGN_TEST_FLAG", raising=False)
    assert _get_bool("OGN_TEST_FLAG", default=True) is True

    monkeypatch.setenv("OGN_TEST_FLAG", "yes")
    assert _get_bool("OGN_TEST_FLAG") is True

    monkeypatch.setenv("OGN_TEST_FLAG", "off")
    assert _get_bool("OGN_TEST_FLAG", default=True) is False


def test_build_feed_config_from_settings():
    settings = Settings(
        host="glidern1.example.test",
        port=14580,
        user="N0CALL",
        passcode="-1",
        aprs_filter=DEFAULT_FILTER,
        tcp_nodelay=False,
    )

    config = build_feed_config(settings)

    assert config.host == "glidern1.example.test"
    assert config.user == "N0CALL"
    assert config.build_filter() == DEFAULT_FILTER
    assert config.tcp_nodelay is False
    assert config.app_name == settings.app_name
