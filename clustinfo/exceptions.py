"""Errors raised by the cluster-info pipeline."""


class ClustInfoError(Exception):
    """Base class for fatal pipeline errors."""


class MalformedRowError(ClustInfoError):
    """A tab-delimited input row does not have the expected fields."""

    def __init__(self, fp, line_number: int, n_fields: int, n_expected: int):
        self.fp = fp
        self.line_number = line_number
        self.n_fields = n_fields
        self.n_expected = n_expected
        super().__init__(
            f"{fp}, line {line_number:,}: found {n_fields} fields, expected at least {n_expected}"
        )


class CorruptIndexError(ClustInfoError):
    """The persisted cluster index could not be decoded."""

    def __init__(self, fp, record_number: int, reason: str):
        self.fp = fp
        self.record_number = record_number
        super().__init__(f"{fp}, record {record_number:,}: {reason}")
