"""Errors raised by the record engine."""

from pydantic import ValidationError


class EngineError(Exception):
    """Base class for record engine errors."""


class InvalidFormat(EngineError, ValueError):
    """A time, date or filter string could not be parsed."""


class NotFound(EngineError, LookupError):
    """No record with the given id exists in the collection."""

    def __init__(self, kind: str, record_id):
        super().__init__(f"{kind} record {record_id!r} not found")
        self.kind = kind
        self.record_id = record_id


class ValidationFailure(EngineError, ValueError):
    """Record fields are missing or invalid for their kind."""

    def __init__(self, kind: str, errors: list[dict]):
        fields = ", ".join(".".join(str(p) for p in e["loc"]) or "<record>" for e in errors)
        super().__init__(f"Invalid {kind} record: {fields}")
        self.kind = kind
        self.errors = errors

    @classmethod
    def from_pydantic(cls, kind: str, exc: ValidationError) -> "ValidationFailure":
        return cls(kind, exc.errors(include_url=False))
