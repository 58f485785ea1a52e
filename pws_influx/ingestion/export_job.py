from concurrent.futures import ThreadPoolExecutor
from typing import List
from .normalizer import FieldNormalizer
from .projector import FieldProjector
from .schema import CurrentConditions
from .wu_client import WUClient
from ..db.influx_client import InfluxClient
from ..utils.logging import get_logger

logger = get_logger(__name__)

class ExportJob:
    def __init__(
        self,
        wu: WUClient,
        projector: FieldProjector,
        normalizer: FieldNormalizer,
        influx: InfluxClient,
        fields: List[str],
        pws_name: str,
        use_alias_names: bool = True,
        debug: bool = False,
    ):
        self.wu = wu
        self.projector = projector
        self.normalizer = normalizer
        self.influx = influx
        self.fields = fields
        self.pws_name = pws_name
        self.use_alias_names = use_alias_names
        self.debug = debug

    def run(self) -> bool:
        """Fetch, project and publish one observation. Returns False when nothing was published."""
        record = self._fetch()

        if self.debug:
            logger.debug(f"WU API response structure:\n{record.model_dump_json(indent=2)}")

        projected = self.projector.project(self.fields, record, self.use_alias_names)
        fields = self.normalizer.normalize(projected)
        logger.info(f"Projected {len(fields)} fields from {len(self.fields)} requested")

        if self.debug:
            logger.info(f"InfluxDB fields structure: {fields!r}")
            logger.warning("Will not publish to InfluxDB in debug mode")
            return False

        self.influx.publish(fields, self.pws_name)
        return True

    def _fetch(self) -> CurrentConditions:
        # the fetch runs on its own worker; errors re-raise from result()
        with ThreadPoolExecutor(max_workers=1, thread_name_prefix="wu-fetch") as pool:
            future = pool.submit(self.wu.get_conditions)
            return future.result()
