"""Exception types raised by resulttriage."""


class TriageError(Exception):
    """Base class for resulttriage errors."""


class PayloadError(TriageError):
    """A lab result payload could not be decoded into panels.

    Raised by ``parse_panels`` only; ``evaluate_payload`` turns it into an
    empty finding list so callers never see it.
    """


class ConfigError(TriageError):
    """The configuration file holds invalid values."""


class RecordFormatError(TriageError):
    """A records file could not be read as a list of result records."""
