"""Error types raised by the transmutation pipeline."""


class TransmuteError(Exception):
    """Base class for every error the transmuter reports."""


class ParseError(TransmuteError):
    """Raised when CSS source cannot be parsed."""

    def __init__(
        self,
        message: str,
        line: int | None = None,
        column: int | None = None,
        source: str | None = None,
    ):
        self.message = message
        self.line = line
        self.column = column
        self.source = source
        super().__init__(self._format())

    def _format(self) -> str:
        location = self.source or "<content>"
        if self.line is not None:
            location = f"{location}:{self.line}"
            if self.column is not None:
                location = f"{location}:{self.column}"
        return f"{location}: {self.message}"

    def with_source(self, source: str) -> "ParseError":
        """Return a copy of this error attributed to *source*."""
        return ParseError(self.message, line=self.line, column=self.column, source=source)


class InputError(TransmuteError):
    """Raised when no usable input was supplied (missing patterns, unreadable files)."""


class SerializationError(TransmuteError):
    """Raised when the transmuted classes cannot be encoded as JSON."""
