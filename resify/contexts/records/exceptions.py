"""Custom exceptions for records context."""

from typing import Optional


class DateParseError(ValueError):
    """
    Exception raised when a date range has dates but neither endpoint parses.

    Attributes:
        from_value: Raw "from" string
        to_value: Raw "to" string
        from_error: Why "from" is unset (None if it parsed)
        to_error: Why "to" is unset (None if it parsed)
    """

    def __init__(
        self,
        from_value: str,
        to_value: str,
        from_error: Optional[str] = None,
        to_error: Optional[str] = None,
    ):
        self.from_value = from_value
        self.to_value = to_value
        self.from_error = from_error
        self.to_error = to_error

        super().__init__(
            "Cannot parse either from: nor to: field -- errors:\n"
            f"from: {from_error}\n"
            f"to:   {to_error}"
        )


class InvalidYAMLStructureError(ValueError):
    """
    Exception raised when a resume document is not valid YAML or its structure is invalid.

    Raised when a field that must be a mapping or list holds something else,
    or when the document itself does not parse.
    """

    pass
