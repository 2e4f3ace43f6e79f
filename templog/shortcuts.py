"""
Module-level logging functions writing through LoggerFactory.get_logger()

Usage:
    from templog import shortcuts as log

    log.infof("listening on %s:%d", host, port)
    log.error("connection lost: ", error)
    log.set_level(Level.DEBUG)
"""

from templog.log.factory import LoggerFactory


def fatal(*values):
    LoggerFactory.get_logger().fatal(*values, stacklevel=2)


def fatalf(format: str, *values):
    LoggerFactory.get_logger().fatalf(format, *values, stacklevel=2)


def error(*values):
    LoggerFactory.get_logger().error(*values, stacklevel=2)


def errorf(format: str, *values):
    LoggerFactory.get_logger().errorf(format, *values, stacklevel=2)


def warning(*values):
    LoggerFactory.get_logger().warning(*values, stacklevel=2)


def warningf(format: str, *values):
    LoggerFactory.get_logger().warningf(format, *values, stacklevel=2)


def print(*values):
    LoggerFactory.get_logger().print(*values, stacklevel=2)


def printf(format: str, *values):
    LoggerFactory.get_logger().printf(format, *values, stacklevel=2)


def info(*values):
    LoggerFactory.get_logger().info(*values, stacklevel=2)


def infof(format: str, *values):
    LoggerFactory.get_logger().infof(format, *values, stacklevel=2)


def debug(*values):
    LoggerFactory.get_logger().debug(*values, stacklevel=2)


def debugf(format: str, *values):
    LoggerFactory.get_logger().debugf(format, *values, stacklevel=2)


def trace(*values):
    LoggerFactory.get_logger().trace(*values, stacklevel=2)


def tracef(format: str, *values):
    LoggerFactory.get_logger().tracef(format, *values, stacklevel=2)


def set_level(level):
    LoggerFactory.get_logger().set_level(level)


def set_format(format):
    LoggerFactory.get_logger().set_format(format)


def set_output(output):
    LoggerFactory.get_logger().set_output(output)
