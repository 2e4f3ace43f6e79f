from templog.format.format import Format, Formatter
from templog.format.placeholders import DEFAULT_PLACEHOLDERS, Placeholder, cacheable, uses_call_site

__all__ = [
    "DEFAULT_PLACEHOLDERS",
    "Format",
    "Formatter",
    "Placeholder",
    "cacheable",
    "uses_call_site",
]
