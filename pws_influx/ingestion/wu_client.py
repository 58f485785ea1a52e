import requests
from typing import Optional
from .schema import CurrentConditions
from .validator import StalenessValidator
from ..errors import WUAPIError
from ..utils.logging import get_logger

logger = get_logger(__name__)

DEFAULT_WU_API_URL = "http://api.wunderground.com/api/{api_key}/conditions/q/pws:{pws_name}.json"


class WUClient:
    """Fetches current conditions for one personal weather station."""

    def __init__(
        self,
        api_key: str,
        pws_name: str,
        base_url: str = DEFAULT_WU_API_URL,
        timeout_s: int = 15,
        debug: bool = False,
        validator: Optional[StalenessValidator] = None,
    ):
        self.url = base_url.format(api_key=api_key, pws_name=pws_name)
        self.pws_name = pws_name
        self.timeout_s = timeout_s
        self.debug = debug
        self.validator = validator or StalenessValidator()

    def _get(self) -> str:
        try:
            r = requests.get(self.url, timeout=self.timeout_s)
        except requests.RequestException as e:
            raise WUAPIError(f"WU API request failed: {e}") from e

        if r.status_code not in (200, 204):
            raise WUAPIError(f"WU API returned HTTP {r.status_code}: {r.text}")

        if self.debug:
            logger.debug(f"Raw WU API response:\n{r.text}")
        return r.text

    def get_conditions(self) -> CurrentConditions:
        body = self._get()

        # pydantic's ValidationError is a ValueError too
        try:
            cond = CurrentConditions.model_validate_json(body)
        except ValueError as e:
            raise WUAPIError(f"Unable to decode WU API response: {e}") from e

        err = cond.response.error
        if err.type or err.description:
            raise WUAPIError(f'Error from WU API: Type "{err.type}", Description "{err.description}"')

        epoch = self.validator.validate(cond)
        logger.info(f"Fetched conditions for PWS {self.pws_name} observed at epoch {epoch}")
        return cond
