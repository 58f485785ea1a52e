from dataclasses import dataclass, replace
from typing import List
from urllib.parse import urlparse
import os
import re

from .errors import ConfigError
from .ingestion.wu_client import DEFAULT_WU_API_URL

API_KEY_RE = re.compile(r"^[a-zA-Z0-9]{16}$")
PWS_NAME_RE = re.compile(r"^[a-zA-Z0-9_-]+$")


def _env_flag(name: str, default: bool) -> bool:
    raw = os.environ.get(name)
    if raw is None:
        return default
    return raw.strip().lower() in ("1", "true", "yes", "on")


@dataclass(frozen=True)
class Settings:
    # Weather Underground
    wu_api_key: str = os.environ.get("WU_API_KEY", "")
    pws_name: str = os.environ.get("WU_PWS_NAME", "")
    field_list: str = os.environ.get("WU_FIELD_LIST", "")
    wu_api_url: str = os.environ.get("WU_API_URL", DEFAULT_WU_API_URL)
    request_timeout_s: int = int(os.environ.get("WU_TIMEOUT_S", "15"))

    # Output keys: WU JSON names when true, native attribute names otherwise
    json_tags: bool = _env_flag("JSON_TAGS", True)
    debug: bool = _env_flag("DEBUG", False)

    # InfluxDB
    influxdb_host: str = os.environ.get("INFLUXDB_HOST", "http://localhost:8086")
    influxdb_name: str = os.environ.get("INFLUXDB_NAME", "")
    influxdb_user: str = os.environ.get("INFLUXDB_USER", "")
    influxdb_password: str = os.environ.get("INFLUXDB_PASSWORD", "")

    @property
    def fields(self) -> List[str]:
        parts = [p.strip() for p in self.field_list.split(",")]
        return [p for p in parts if p]

    def validated(self) -> "Settings":
        """Check mandatory parameters; may fill influxdb_name from the host URL path."""
        if not self.wu_api_key or not self.pws_name or not self.fields:
            raise ConfigError("api key, PWS name and field list are mandatory parameters")

        if not API_KEY_RE.match(self.wu_api_key):
            raise ConfigError(
                f'API key "{self.wu_api_key}" is not in valid format (16-digit alphanumeric string required)'
            )

        if not PWS_NAME_RE.match(self.pws_name):
            raise ConfigError(
                f'PWS name "{self.pws_name}" is not in valid format '
                "(alphanumeric string including minus and underscore required)"
            )

        settings = self
        if self.influxdb_host:
            p = urlparse(self.influxdb_host)
            if not p.netloc:
                raise ConfigError(f'InfluxDB host "{self.influxdb_host}" is missing proper host name')

            # a database in the URL path stands in for a missing influxdb_name
            db = p.path.strip("/")
            if db and not settings.influxdb_name:
                settings = replace(settings, influxdb_host=f"{p.scheme}://{p.netloc}", influxdb_name=db)

        if not settings.debug and not settings.influxdb_name:
            raise ConfigError("InfluxDB database name is mandatory when not in debug mode")

        return settings
