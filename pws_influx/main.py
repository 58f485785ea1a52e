import argparse
import logging
import sys
from dataclasses import replace
from typing import List, Optional

from pws_influx.config import Settings
from pws_influx.errors import ConfigError, ExporterError
from pws_influx.utils.logging import get_logger, setup_logging

from pws_influx.db.influx_client import InfluxClient

from pws_influx.ingestion.wu_client import WUClient
from pws_influx.ingestion.projector import FieldProjector
from pws_influx.ingestion.normalizer import FieldNormalizer
from pws_influx.ingestion.export_job import ExportJob

logger = get_logger(__name__)

# CLI flag -> Settings attribute
_OVERRIDES = {
    "api_key": "wu_api_key",
    "pws_name": "pws_name",
    "field_list": "field_list",
    "debug": "debug",
    "json_tags": "json_tags",
    "influxdb_host": "influxdb_host",
    "influxdb_name": "influxdb_name",
    "influxdb_user": "influxdb_user",
    "influxdb_password": "influxdb_password",
}

def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="pws-influx",
        description="Publish Weather Underground PWS conditions to InfluxDB",
    )
    parser.add_argument("--api-key", help="WeatherUnderground API key")
    parser.add_argument("--pws-name", help="PWS name")
    parser.add_argument("--field-list", help="Comma separated list of WU attributes")
    parser.add_argument("--debug", action="store_true", default=None,
                        help="Dump WU API responses and fields, do not publish")
    parser.add_argument("--json-tags", action=argparse.BooleanOptionalAction, default=None,
                        help="Use WU JSON names for InfluxDB fields")
    parser.add_argument("--influxdb-host", help="InfluxDB URL, optionally with the database as path")
    parser.add_argument("--influxdb-name", help="InfluxDB database name")
    parser.add_argument("--influxdb-user", help="InfluxDB username")
    parser.add_argument("--influxdb-password", help="InfluxDB password")
    return parser

def load_settings(argv: Optional[List[str]] = None, base: Optional[Settings] = None) -> Settings:
    args = build_parser().parse_args(argv)
    overrides = {
        attr: getattr(args, flag)
        for flag, attr in _OVERRIDES.items()
        if getattr(args, flag) is not None
    }
    return replace(base or Settings(), **overrides)

def export(s: Settings) -> bool:
    wu = WUClient(s.wu_api_key, s.pws_name, base_url=s.wu_api_url,
                  timeout_s=s.request_timeout_s, debug=s.debug)
    influx = InfluxClient(s.influxdb_host, s.influxdb_user, s.influxdb_password, s.influxdb_name)

    job = ExportJob(wu, FieldProjector(), FieldNormalizer(), influx, s.fields, s.pws_name,
                    use_alias_names=s.json_tags, debug=s.debug)
    return job.run()

def main(argv: Optional[List[str]] = None) -> int:
    setup_logging()
    s = load_settings(argv)
    if s.debug:
        logging.getLogger().setLevel(logging.DEBUG)

    try:
        s = s.validated()
    except ConfigError as e:
        logger.error(f"Invalid configuration: {e}")
        return 1

    try:
        published = export(s)
    except ExporterError as e:
        logger.error(f"Export failed: {e}")
        return 1

    return 0 if published else 1

if __name__ == "__main__":
    sys.exit(main())
