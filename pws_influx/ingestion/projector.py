from typing import Dict, Iterable, List, Tuple
from .schema import (
    CORE_FIELDS,
    CORE_FIELDS_BY_NATIVE,
    PROMOTED_FIELDS,
    SECTIONS,
    CurrentConditions,
    FieldDescriptor,
    Scalar,
    WeatherResponse,
    WUModel,
)
from ..errors import ContractViolationError, MissingTimestampError
from ..utils.logging import get_logger

logger = get_logger(__name__)

EPOCH_KEY = "observation_epoch"


class FieldProjector:
    """Flattens the requested attributes of an observation into one map.

    Each requested name is tried twice: as a native attribute of
    current_observation (its own scalars, or an unambiguous field of one of
    its optional blocks), then as a WU alias anywhere in the record.
    Both lookups may write the same key, the later one wins. Blocks the
    station does not report are never visited.
    """

    def project(
        self,
        requested: Iterable[str],
        record: CurrentConditions,
        use_alias_names: bool = True,
    ) -> Dict[str, Scalar]:
        weather = record.current_observation
        if weather is None:
            raise ContractViolationError("Observation record has no current_observation block")

        epoch = weather.observation_epoch
        if epoch is None or (isinstance(epoch, str) and not epoch.strip()):
            raise MissingTimestampError("Missing observation_epoch timestamp in observation")

        owners = self._owners(weather)
        fields: Dict[str, Scalar] = {}

        for name in requested:
            found = False

            descriptor = CORE_FIELDS_BY_NATIVE.get(name)
            if descriptor is not None:
                fields[descriptor.key(use_alias_names)] = descriptor.read(weather)
                found = True
            elif name in PROMOTED_FIELDS:
                section, descriptor = PROMOTED_FIELDS[name]
                block = section.resolve(weather)
                if block is not None:
                    fields[descriptor.key(use_alias_names)] = descriptor.read(block)
                    found = True

            for owner, descriptors in owners:
                for d in descriptors:
                    if d.alias == name:
                        fields[d.key(use_alias_names)] = d.read(owner)
                        found = True

            if not found:
                logger.debug(f"Requested field {name!r} not present in observation, skipping")

        # Always pass the Unix timestamp
        fields[EPOCH_KEY] = epoch
        return fields

    def _owners(self, weather: WeatherResponse) -> List[Tuple[WUModel, Tuple[FieldDescriptor, ...]]]:
        owners: List[Tuple[WUModel, Tuple[FieldDescriptor, ...]]] = [(weather, CORE_FIELDS)]
        for section in SECTIONS:
            block = section.resolve(weather)
            if block is None:
                continue
            owners.append((block, section.fields))
        return owners
