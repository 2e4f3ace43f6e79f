from templog.log.logger import Logger


class Discarder(Logger):
    """
    Logger that drops every record.

    Fatal methods don't exit either, nothing happens at all.
    """

    def fatal(self, *values, stacklevel: int = 1):
        pass

    def fatalf(self, format: str, *values, stacklevel: int = 1):
        pass

    def error(self, *values, stacklevel: int = 1):
        pass

    def errorf(self, format: str, *values, stacklevel: int = 1):
        pass

    def warning(self, *values, stacklevel: int = 1):
        pass

    def warningf(self, format: str, *values, stacklevel: int = 1):
        pass

    def print(self, *values, stacklevel: int = 1):
        pass

    def printf(self, format: str, *values, stacklevel: int = 1):
        pass

    def info(self, *values, stacklevel: int = 1):
        pass

    def infof(self, format: str, *values, stacklevel: int = 1):
        pass

    def debug(self, *values, stacklevel: int = 1):
        pass

    def debugf(self, format: str, *values, stacklevel: int = 1):
        pass

    def trace(self, *values, stacklevel: int = 1):
        pass

    def tracef(self, format: str, *values, stacklevel: int = 1):
        pass


def new_discarder() -> Discarder:
    return Discarder()
