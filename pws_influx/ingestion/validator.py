import time
from datetime import datetime, timedelta
from typing import Any, Callable
from dateutil import tz
from .schema import CurrentConditions
from ..errors import ContractViolationError, MalformedTimestampError, MissingTimestampError, StaleObservationError

MAX_OBSERVATION_AGE = timedelta(hours=2)

# Unix seconds travel as a signed 64-bit integer
EPOCH_MIN = -(2 ** 63)
EPOCH_MAX = 2 ** 63 - 1


def _checked(epoch: int, raw: Any) -> int:
    if not EPOCH_MIN <= epoch <= EPOCH_MAX:
        raise MalformedTimestampError(f"observation_epoch {raw!r} is out of range")
    return epoch


def parse_epoch(value: Any) -> int:
    """Parse a Unix second count sent as digits or as an integral number."""
    if value is None:
        raise MissingTimestampError("Missing observation_epoch timestamp")
    if isinstance(value, bool):
        raise MalformedTimestampError(f"Invalid observation_epoch {value!r}")
    if isinstance(value, int):
        return _checked(value, value)
    if isinstance(value, float):
        if value.is_integer():
            return _checked(int(value), value)
        raise MalformedTimestampError(f"Invalid observation_epoch {value!r}")
    try:
        return _checked(int(str(value).strip()), value)
    except ValueError as e:
        raise MalformedTimestampError(f"Invalid observation_epoch {value!r}") from e


def epoch_to_datetime(epoch: int) -> datetime:
    try:
        return datetime.fromtimestamp(epoch, tz=tz.UTC)
    except (OverflowError, OSError, ValueError) as e:
        raise MalformedTimestampError(f"observation_epoch {epoch} is not a representable time: {e}") from e


class StalenessValidator:
    def __init__(self, max_age: timedelta = MAX_OBSERVATION_AGE, clock: Callable[[], float] = time.time):
        self.max_age = max_age
        self.clock = clock

    def validate(self, record: CurrentConditions) -> int:
        weather = record.current_observation
        if weather is None:
            raise ContractViolationError("Observation record has no current_observation block")

        epoch = parse_epoch(weather.observation_epoch)
        age = datetime.fromtimestamp(self.clock(), tz=tz.UTC) - epoch_to_datetime(epoch)
        if age > self.max_age:
            raise StaleObservationError(
                f"Error in WU API data: more than {self.max_age} in time offset from observation_epoch: {age}"
            )
        return epoch
