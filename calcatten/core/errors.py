"""Error types raised by the attenuation calculator.

None of these are recovered inside the library.  They propagate to the
caller; the command-line driver turns them into a non-zero exit code.
"""

import math


class CalcAttenError(Exception):
    """Base class for all calculator errors."""


class UsageError(CalcAttenError):
    """Raised when the driver is invoked without a command script."""


class ResourceNotFound(CalcAttenError, FileNotFoundError):
    """Raised when a material table or command script cannot be opened."""


class ScriptFormatError(CalcAttenError, ValueError):
    """Raised when a command script line does not have the expected shape."""


class MalformedRecord(CalcAttenError, ValueError):
    """Raised when a material table line does not have the expected shape."""


class MissingField(CalcAttenError, KeyError):
    """Raised when a required record is absent from a material table."""

    def __str__(self) -> str:
        # KeyError quotes its argument; keep the plain message.
        return str(self.args[0]) if self.args else ""


class InvalidNumber(CalcAttenError, ValueError):
    """Raised when text cannot be converted to a float."""


def parse_float(text: str, what: str) -> float:
    """Convert *text* to a finite float, raising :class:`InvalidNumber` on failure.

    Args:
        text: Text to convert (surrounding whitespace is ignored).
        what: Short description of the value, used in the error message.
    """
    try:
        if isinstance(text, str) and "_" in text:
            raise ValueError(text)
        value = float(text)
    except (TypeError, ValueError):
        raise InvalidNumber(f"Invalid {what}: {text!r}") from None
    if not math.isfinite(value):
        raise InvalidNumber(f"Invalid {what}: {text!r} is not finite")
    return value
