class ExporterError(Exception):
    """Base class for every failure the exporter reports."""


class ConfigError(ExporterError):
    pass


class WUAPIError(ExporterError):
    """Transport, HTTP, decoding or remote API failure while fetching conditions."""


class StaleObservationError(ExporterError):
    pass


class MissingTimestampError(ExporterError):
    pass


class MalformedTimestampError(ExporterError):
    pass


class ContractViolationError(ExporterError):
    """The observation record is missing a block that deserialization guarantees."""


class PublishError(ExporterError):
    """InfluxDB refused the point or could not be reached."""
