"""
Exception hierarchy for stationgen.

Library code raises these; only the command line layer turns them into
diagnostics and exit codes.
"""


class StationGenError(Exception):
    """Base class for all stationgen errors."""
    pass


class ConfigError(StationGenError):
    """Raised when a generator configuration is invalid or unreadable."""
    pass


class CatalogError(StationGenError):
    """Raised when a station catalog (or a single station) is invalid."""
    pass


class SerializationError(StationGenError):
    """Raised when a measurement does not fit the serialization buffer."""
    pass


class SinkError(StationGenError):
    """
    Raised when the output file or directory cannot be created or written.

    Attributes:
        operation: Short name of the failing filesystem operation
        path: Path the operation was applied to
    """

    def __init__(self, operation: str, path, cause: Exception = None):
        self.operation = operation
        self.path = path
        self.cause = cause
        message = f"can't {operation} '{path}'"
        if cause is not None:
            message = f"{message}: {cause}"
        super().__init__(message)


class MeasurementFormatError(StationGenError):
    """Raised when a measurement line cannot be parsed."""
    pass
