"""Exceptions raised by the health probe."""


class ProbeError(Exception):
    """Base class for fatal probe failures."""


class ConfigurationError(ProbeError):
    """A required setting is missing or cannot be parsed."""


class RangeError(ConfigurationError):
    """A threshold lies outside [0, 1]."""


class SamplingError(ProbeError):
    """Resource usage could not be sampled."""


class StorageError(ProbeError):
    """The watermark could not be written."""


class EventLogError(ProbeError):
    """The event log rejected the query or a record could not be read."""


class DeliveryError(ProbeError):
    """The report could not be delivered.

    Attributes:
        status_code: HTTP status returned by the endpoint, if any.
    """

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code
