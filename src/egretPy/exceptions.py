"""Exceptions raised by egretPy."""


class EgretError(Exception):
    """Base class for all egretPy errors."""


class MissingFieldError(EgretError, KeyError):
    """
    Raised when a named-list style object does not carry an expected part.

    Attributes:
        field (str): The key that was looked up (e.g. "Sample").
        part_kind (str): What the key should hold (e.g. "dataframe").
    """

    def __init__(self, field: str, part_kind: str = "dataframe", message=None):
        self.field = field
        self.part_kind = part_kind
        if message is None:
            message = (
                f"Please provide a named list that includes a {field} {part_kind}"
            )
        super().__init__(message)

    def __str__(self):
        # KeyError quotes its argument; keep the plain message instead.
        return str(self.args[0])


class ContractViolation(EgretError, TypeError):
    """Raised when a function is called on something that is not an EgretList."""
