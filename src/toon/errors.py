"""Exceptions raised by the TOON encoder and decoder."""

from typing import Optional


class ToonDecodeError(ValueError):
    """Raised when TOON text is structurally invalid in strict mode."""

    def __init__(self, message: str, line_number: Optional[int] = None) -> None:
        self.line_number = line_number
        if line_number is not None:
            message = f"line {line_number}: {message}"
        super().__init__(message)


class MalformedArrayHeaderError(ToonDecodeError):
    """Array header does not match ``[N]`` optionally followed by ``{fields}`` and a colon."""


class RowCountMismatchError(ToonDecodeError):
    """Array declares N entries but a different number follow."""


class FieldCountMismatchError(ToonDecodeError):
    """Tabular row value count differs from the declared field count."""


class IndentationMismatchError(ToonDecodeError):
    """A line sits at an indentation no enclosing construct expects."""


class MissingListMarkerError(ToonDecodeError):
    """List array item lacks the leading ``- `` marker."""


class UnexpectedLineError(ToonDecodeError):
    """A line at object level matches none of the key patterns."""


class ToonEncodeError(ValueError):
    """Raised when a value cannot be represented in TOON."""


class UnsupportedValueError(ToonEncodeError):
    """Value kind outside null, bool, number, string, object and array."""
