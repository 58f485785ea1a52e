from typing import Any, Dict, Mapping
from urllib.parse import urlparse
import requests
from influxdb import InfluxDBClient
from influxdb.exceptions import InfluxDBClientError, InfluxDBServerError
from ..errors import MissingTimestampError, PublishError
from ..ingestion.projector import EPOCH_KEY
from ..ingestion.validator import epoch_to_datetime, parse_epoch
from ..utils.logging import get_logger

logger = get_logger(__name__)

MEASUREMENT = "climate"
PRECISION = "s"
SOURCE_TAG = "wunderground"


class InfluxClient:
    def __init__(self, url: str, username: str, password: str, database: str):
        parsed = urlparse(url)
        self.host = parsed.hostname or "localhost"
        self.port = parsed.port or 8086
        self.ssl = parsed.scheme == "https"
        self.username = username
        self.password = password
        self.database = database

    def build_point(self, fields: Mapping[str, Any], pws_name: str) -> Dict[str, Any]:
        if EPOCH_KEY not in fields:
            raise MissingTimestampError(f"Missing {EPOCH_KEY} timestamp in fields structure")
        epoch = parse_epoch(fields[EPOCH_KEY])

        return {
            "measurement": MEASUREMENT,
            "tags": {"source": SOURCE_TAG, "pws_name": pws_name},
            "time": epoch_to_datetime(epoch),
            "fields": dict(fields),
        }

    def publish(self, fields: Mapping[str, Any], pws_name: str) -> None:
        point = self.build_point(fields, pws_name)

        conn = InfluxDBClient(
            host=self.host,
            port=self.port,
            username=self.username,
            password=self.password,
            database=self.database,
            ssl=self.ssl,
            verify_ssl=self.ssl,
        )
        try:
            conn.write_points([point], time_precision=PRECISION, database=self.database)
        except (InfluxDBClientError, InfluxDBServerError, requests.RequestException) as e:
            raise PublishError(f"Failed to write point to InfluxDB {self.host}:{self.port}: {e}") from e
        finally:
            conn.close()
        logger.info(f"Published {len(point['fields'])} fields to {self.database}.{MEASUREMENT} at {point['time']}")
