class OutputError(Exception):
    """Exception raised when a log record could not be written to its sinks.

    Attributes:
        level: level of the record that failed to be written
        errors: list of (sink, exception) pairs for every failed sink
    """

    def __init__(self, level, errors=None, reason=""):
        self.level = level
        self.errors = errors or []
        if not reason:
            failed = ", ".join(f"{sink!r}: {error}" for sink, error in self.errors)
            reason = f"failed to write record with level {level} to {failed}"
        super().__init__(reason)


class NoWritersError(OutputError):
    """Exception raised when there is no sink configured for a level."""

    def __init__(self, level):
        super().__init__(level, reason=f"there is no writers for level {level}")


class ConfigError(Exception):
    """Exception raised for invalid logging configuration.

    Attributes:
        field_name: configuration key that didn't pass validation
        reason: reason of validation error
    """

    def __init__(self, field_name: str, reason=""):
        self.field_name = field_name
        self.reason = reason
        super().__init__(f"Unable to parse {field_name} in logging configuration. {reason}")
