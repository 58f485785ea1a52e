from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Tuple, Type, Union
from pydantic import BaseModel, ConfigDict, Field, model_validator

# WU sends numbers both as JSON numbers and as strings; keep whatever arrived.
Scalar = Union[int, float, str]


class WUModel(BaseModel):
    model_config = ConfigDict(extra="ignore", frozen=True, populate_by_name=True)


class ObservationLocation(WUModel):
    city: str = Field("", alias="city")
    full: str = Field("", alias="full")
    elevation: Scalar = Field("", alias="elevation")
    country: str = Field("", alias="country")
    longitude: Scalar = Field("", alias="longitude")
    state: str = Field("", alias="state")
    country_iso3166: str = Field("", alias="country_iso3166")
    latitude: Scalar = Field("", alias="latitude")


class DisplayLocation(WUModel):
    city: str = Field("", alias="city")
    full: str = Field("", alias="full")
    magic: Scalar = Field("", alias="magic")
    state_name: str = Field("", alias="state_name")
    zip: Scalar = Field("", alias="zip")
    country: str = Field("", alias="country")
    longitude: Scalar = Field("", alias="longitude")
    state: Scalar = Field("", alias="state")
    wmo: Scalar = Field("", alias="wmo")
    country_iso3166: str = Field("", alias="country_iso3166")
    latitude: Scalar = Field("", alias="latitude")
    elevation: Scalar = Field("", alias="elevation")


class Temperature(WUModel):
    description: str = Field("", alias="temperature_string")
    heat_index_string: str = Field("", alias="heat_index_string")
    fahrenheit: Scalar = Field("", alias="temp_f")
    celsius: Scalar = Field("", alias="temp_c")
    feels_like_fahrenheit: Scalar = Field("", alias="feelslike_f")
    heat_index_fahrenheit: Scalar = Field("", alias="heat_index_f")
    feels_like_celsius: Scalar = Field("", alias="feelslike_c")
    heat_index_celsius: Scalar = Field("", alias="heat_index_c")


class Precipitation(WUModel):
    description: str = Field("", alias="precip_today_string")
    today_metric: Scalar = Field("", alias="precip_today_metric")
    today_in: Scalar = Field("", alias="precip_today_in")
    one_hour_string: str = Field("", alias="precip_1hr_string")
    one_hour_metric: Scalar = Field("", alias="precip_1hr_metric")
    one_hour_in: Scalar = Field("", alias="precip_1hr_in")
    relative_humidity: Scalar = Field("", alias="relative_humidity")


class Wind(WUModel):
    description: str = Field("", alias="wind_string")
    direction: str = Field("", alias="wind_dir")
    degrees: Scalar = Field("", alias="wind_degrees")
    mph: Scalar = Field("", alias="wind_mph")
    gust_mph: Scalar = Field("", alias="wind_gust_mph")
    kph: Scalar = Field("", alias="wind_kph")
    gust_kph: Scalar = Field("", alias="wind_gust_kph")


class Windchill(WUModel):
    description: str = Field("", alias="windchill_string")
    fahrenheit: Scalar = Field("", alias="windchill_f")
    celsius: Scalar = Field("", alias="windchill_c")


class Dewpoint(WUModel):
    description: str = Field("", alias="dewpoint_string")
    fahrenheit: Scalar = Field("", alias="dewpoint_f")
    celsius: Scalar = Field("", alias="dewpoint_c")


class Pressure(WUModel):
    trend: str = Field("", alias="pressure_trend")
    inches: Scalar = Field("", alias="pressure_in")
    millibars: Scalar = Field("", alias="pressure_mb")


class Solar(WUModel):
    radiation: Scalar = Field("", alias="solarradiation")
    uv: Scalar = Field("", alias="UV")


class Visibility(WUModel):
    km: Scalar = Field("", alias="visibility_km")
    mi: Scalar = Field("", alias="visibility_mi")


# Instrument dependent blocks, in traversal order.
OPTIONAL_SECTION_MODELS: Tuple[Tuple[str, Type[WUModel]], ...] = (
    ("temperature", Temperature),
    ("precipitation", Precipitation),
    ("wind", Wind),
    ("windchill", Windchill),
    ("dewpoint", Dewpoint),
    ("pressure", Pressure),
    ("solar", Solar),
    ("visibility", Visibility),
)


def _aliases(model: Type[WUModel]) -> Tuple[str, ...]:
    return tuple(info.alias or name for name, info in model.model_fields.items())


class WeatherResponse(WUModel):
    observation_location: ObservationLocation = Field(default_factory=ObservationLocation)
    display_location: DisplayLocation = Field(default_factory=DisplayLocation)
    description: str = Field("", alias="weather")
    observation_time: str = Field("", alias="observation_time")
    observation_epoch: Optional[Scalar] = Field(None, alias="observation_epoch")
    observation_time_rfc822: str = Field("", alias="observation_time_rfc822")

    temperature: Optional[Temperature] = None
    precipitation: Optional[Precipitation] = None
    wind: Optional[Wind] = None
    windchill: Optional[Windchill] = None
    dewpoint: Optional[Dewpoint] = None
    pressure: Optional[Pressure] = None
    solar: Optional[Solar] = None
    visibility: Optional[Visibility] = None

    @model_validator(mode="before")
    @classmethod
    def group_sections(cls, data: Any) -> Any:
        """WU flattens every block into current_observation; regroup them.

        A block exists as soon as one of its keys is in the payload, the
        rest of its fields keep their empty defaults.
        """
        if not isinstance(data, dict):
            return data
        grouped = dict(data)
        for attr, model in OPTIONAL_SECTION_MODELS:
            if attr in grouped:
                continue
            picked = {alias: data[alias] for alias in _aliases(model) if alias in data}
            if picked:
                grouped[attr] = picked
        return grouped


class ErrorResponse(WUModel):
    type: str = Field("", alias="type")
    description: str = Field("", alias="description")


class Response(WUModel):
    terms_of_service: str = Field("", alias="termsofService")
    version: str = Field("", alias="version")
    error: ErrorResponse = Field(default_factory=ErrorResponse, alias="error")


class CurrentConditions(WUModel):
    current_observation: Optional[WeatherResponse] = Field(None, alias="current_observation")
    response: Response = Field(default_factory=Response, alias="response")


@dataclass(frozen=True)
class FieldDescriptor:
    native: str
    alias: str

    def read(self, owner: WUModel) -> Scalar:
        return getattr(owner, self.native)

    def key(self, use_alias_names: bool) -> str:
        return self.alias if use_alias_names else self.native


@dataclass(frozen=True)
class SectionDescriptor:
    attr: str
    fields: Tuple[FieldDescriptor, ...]
    optional: bool

    def resolve(self, weather: WeatherResponse) -> Optional[WUModel]:
        return getattr(weather, self.attr)


def _describe(model: Type[WUModel], skip: Tuple[str, ...] = ()) -> Tuple[FieldDescriptor, ...]:
    return tuple(
        FieldDescriptor(name, info.alias or name)
        for name, info in model.model_fields.items()
        if name not in skip
    )


SECTIONS: Tuple[SectionDescriptor, ...] = (
    SectionDescriptor("observation_location", _describe(ObservationLocation), optional=False),
    SectionDescriptor("display_location", _describe(DisplayLocation), optional=False),
) + tuple(
    SectionDescriptor(attr, _describe(model), optional=True)
    for attr, model in OPTIONAL_SECTION_MODELS
)

# Scalars owned directly by current_observation.
CORE_FIELDS: Tuple[FieldDescriptor, ...] = _describe(
    WeatherResponse, skip=tuple(section.attr for section in SECTIONS)
)
CORE_FIELDS_BY_NATIVE: Dict[str, FieldDescriptor] = {f.native: f for f in CORE_FIELDS}


def _promoted(core: Dict[str, FieldDescriptor]) -> Dict[str, Tuple[SectionDescriptor, FieldDescriptor]]:
    """Native names of optional block fields reachable straight from current_observation.

    A name shared by two blocks is ambiguous and never promoted; a core
    scalar of the same name shadows it.
    """
    seen: Dict[str, List[Tuple[SectionDescriptor, FieldDescriptor]]] = {}
    for section in SECTIONS:
        if not section.optional:
            continue
        for f in section.fields:
            seen.setdefault(f.native, []).append((section, f))
    return {name: owners[0] for name, owners in seen.items() if len(owners) == 1 and name not in core}


PROMOTED_FIELDS: Dict[str, Tuple[SectionDescriptor, FieldDescriptor]] = _promoted(CORE_FIELDS_BY_NATIVE)
