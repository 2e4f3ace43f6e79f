import sys
from typing import NamedTuple, Optional


class CallSite(NamedTuple):
    """Source location of a logging call, captured once at the public entry point."""

    filename: str
    lineno: int

    @classmethod
    def capture(cls, depth: int = 1) -> Optional["CallSite"]:
        """Capture the location of a frame above the caller of this method.

        :param depth: 0 is the function calling capture(), 1 its caller and so on
        :return: CallSite or None when the stack is not that deep
        """
        try:
            frame = sys._getframe(depth + 1)
        except ValueError:
            return None
        return cls(frame.f_code.co_filename, frame.f_lineno)
