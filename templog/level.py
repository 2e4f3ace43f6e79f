from enum import IntEnum


class Level(IntEnum):
    """Severity levels of log records.

    Lower value means higher severity, so a record is logged when
    ``threshold >= record_level``. FATAL records therefore pass every threshold.
    """

    FATAL = 0
    ERROR = 1
    WARNING = 2
    INFO = 3
    DEBUG = 4
    TRACE = 5

    def to_string(self) -> str:
        return self.name

    def to_string_short(self) -> str:
        """Abbreviated name, only WARNING has one ("WARN")."""
        if self is Level.WARNING:
            return "WARN"
        return self.to_string()

    def __str__(self) -> str:
        return self.to_string()

    @classmethod
    def from_name(cls, name: str) -> "Level":
        """Parse a level name, full or short, case-insensitive.

        :param name: level name like "debug", "WARNING" or "warn"
        :return: matching Level
        :raises ValueError: if name is not a known level
        """
        normalized = str(name).strip().upper()
        for level in cls:
            if normalized in (level.to_string(), level.to_string_short()):
                return level
        raise ValueError(f"Invalid log level: {name}. Must be one of: {', '.join(level_names())}")


def level_names() -> list:
    return [level.to_string() for level in Level]


def level_name(value: int) -> str:
    """Full name for any integer value, "UNKNOWN" outside of the Level range."""
    try:
        return Level(value).to_string()
    except ValueError:
        return "UNKNOWN"
