class ReceiverError(Exception):
    """Base class for every error raised by ipcreceiver."""


class DecodeError(ReceiverError):
    """Raised when bytes do not parse as the expected envelope or record.

    Redelivery would reproduce the same bytes, so callers drop the message
    instead of retrying.
    """


class ConfigurationError(ReceiverError):
    """Raised before the consumer loop starts when the setup is unusable."""


__all__ = ["ReceiverError", "DecodeError", "ConfigurationError"]
