from __future__ import annotations

import time

import pytest

from pws_influx.ingestion.schema import CurrentConditions

NOW = 1_700_000_000


def wu_payload(epoch=NOW, drop=(), **extra) -> dict:
    """A WU conditions document as the API flattens it."""
    observation = {
        "observation_location": {
            "city": "Oakland, Lakeshore",
            "full": "Oakland, Lakeshore, California",
            "elevation": "112 ft",
            "country": "US",
            "longitude": "-122.249",
            "state": "California",
            "country_iso3166": "US",
            "latitude": "37.806",
        },
        "display_location": {
            "city": "Oakland",
            "full": "Oakland, CA",
            "magic": "1",
            "state_name": "California",
            "zip": "94610",
            "country": "US",
            "longitude": "-122.24",
            "state": "CA",
            "wmo": "99999",
            "country_iso3166": "US",
            "latitude": "37.81",
            "elevation": "34.1",
        },
        "weather": "Partly Cloudy",
        "observation_time": "Last Updated on November 14, 2:13 PM PST",
        "observation_epoch": str(epoch),
        "observation_time_rfc822": "Tue, 14 Nov 2023 14:13:20 -0800",
        "temperature_string": "72.0 F (22.2 C)",
        "temp_f": 72.0,
        "temp_c": 22.2,
        "heat_index_string": "NA",
        "heat_index_f": "NA",
        "heat_index_c": "NA",
        "feelslike_f": "72.0",
        "feelslike_c": "22.2",
        "relative_humidity": "45%",
        "precip_today_string": "0.00 in (0 mm)",
        "precip_today_in": "0.00",
        "precip_today_metric": "0",
        "precip_1hr_string": "-999.00 in ( 0 mm)",
        "precip_1hr_in": "-999.00",
        "precip_1hr_metric": " 0",
        "wind_string": "From the WNW at 5.0 MPH",
        "wind_dir": "WNW",
        "wind_degrees": 293,
        "wind_mph": 5.0,
        "wind_gust_mph": "7.0",
        "wind_kph": 8.0,
        "wind_gust_kph": "11.3",
        "dewpoint_string": "49 F (9 C)",
        "dewpoint_f": 49,
        "dewpoint_c": 9,
        "windchill_string": "NA",
        "windchill_f": "NA",
        "windchill_c": "NA",
        "pressure_mb": "1019",
        "pressure_in": "30.10",
        "pressure_trend": "-",
        "solarradiation": "312",
        "UV": "3",
        "visibility_mi": "10.0",
        "visibility_km": "16.1",
    }
    for key in drop:
        observation.pop(key, None)
    observation.update(extra)
    return {
        "response": {"version": "0.1", "termsofService": "http://www.wunderground.com/weather/api/d/terms.html"},
        "current_observation": observation,
    }


WIND_KEYS = ("wind_string", "wind_dir", "wind_degrees", "wind_mph", "wind_gust_mph", "wind_kph", "wind_gust_kph")


@pytest.fixture
def payload() -> dict:
    return wu_payload()


@pytest.fixture
def record() -> CurrentConditions:
    return CurrentConditions.model_validate(wu_payload())


@pytest.fixture
def calm_record() -> CurrentConditions:
    """A station without an anemometer."""
    return CurrentConditions.model_validate(wu_payload(drop=WIND_KEYS))


@pytest.fixture
def fresh_epoch() -> int:
    return int(time.time()) - 60
