"""
Entity Resolution Errors.

Responsibilities:
- Name the two failure conditions the matching engine can raise.

Invariant:
Errors are raised, never swallowed; the engine either completes wholly
or fails wholly.
"""


class InvalidArgument(ValueError):
    """Raised when a caller passes an out-of-range threshold or a bad field selection."""
    pass


class MalformedRecord(ValueError):
    """Raised when a record's birth date cannot be split into year, month and day."""

    def __init__(self, record, reason: str):
        self.record = record
        self.reason = reason
        record_id = getattr(record, "record_id", None)
        label = f"record {record_id}" if record_id is not None else f"record {record!r}"
        super().__init__(f"Malformed {label}: {reason}")
