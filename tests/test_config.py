from __future__ import annotations

import pytest

from pws_influx.config import Settings
from pws_influx.errors import ConfigError

API_KEY = "0123456789abcdef"


def settings(**overrides) -> Settings:
    base = dict(
        wu_api_key=API_KEY,
        pws_name="KCAOAKLA1",
        field_list="temp_f,wind_dir",
        debug=False,
        influxdb_host="http://localhost:8086",
        influxdb_name="weather",
    )
    base.update(overrides)
    return Settings(**base)


def test_field_list_is_split_and_trimmed():
    assert settings(field_list=" temp_f, wind_dir,,UV ").fields == ["temp_f", "wind_dir", "UV"]


def test_valid_settings_pass_unchanged():
    s = settings()

    assert s.validated() == s


@pytest.mark.parametrize("missing", ["wu_api_key", "pws_name", "field_list"])
def test_mandatory_parameters(missing):
    with pytest.raises(ConfigError, match="mandatory"):
        settings(**{missing: ""}).validated()


def test_blank_field_list_counts_as_missing():
    with pytest.raises(ConfigError, match="mandatory"):
        settings(field_list=" , ").validated()


@pytest.mark.parametrize("key", ["0123456789abcde", "0123456789abcdef0", "0123456789abcde!"])
def test_api_key_format(key):
    with pytest.raises(ConfigError, match="API key"):
        settings(wu_api_key=key).validated()


@pytest.mark.parametrize("name", ["KCA OAKLA1", "KCA/OAKLA1", "pws:1"])
def test_pws_name_format(name):
    with pytest.raises(ConfigError, match="PWS name"):
        settings(pws_name=name).validated()


def test_pws_name_allows_minus_and_underscore():
    assert settings(pws_name="my-pws_2").validated().pws_name == "my-pws_2"


def test_influxdb_host_needs_a_host_name():
    with pytest.raises(ConfigError, match="host name"):
        settings(influxdb_host="localhost").validated()


def test_database_name_from_url_path():
    s = settings(influxdb_host="http://influx.local:8086/climate/", influxdb_name="").validated()

    assert s.influxdb_name == "climate"
    assert s.influxdb_host == "http://influx.local:8086"


def test_explicit_database_name_wins_over_url_path():
    s = settings(influxdb_host="http://influx.local:8086/climate", influxdb_name="weather").validated()

    assert s.influxdb_name == "weather"


def test_database_name_is_mandatory_outside_debug():
    with pytest.raises(ConfigError, match="database name"):
        settings(influxdb_name="").validated()


def test_debug_mode_does_not_need_a_database():
    assert settings(influxdb_name="", debug=True).validated().debug
