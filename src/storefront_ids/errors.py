from typing import Any, Optional
import json


class AllocationError(RuntimeError):
    """
    Base class for identifier allocation failures.

    Request handlers map these to a failure payload with ``to_dict()``.
    """

    code = "allocation_error"

    def to_dict(self) -> dict[str, Any]:
        return {
            "success": False,
            "error": self.code,
            "message": str(self),
        }

    def to_json(self) -> str:
        return json.dumps(self.to_dict())


class TransientCollision(AllocationError):
    """A candidate identifier was already taken. Retried internally."""

    code = "collision"

    def __init__(self, sequence: str, identifier: Any):
        self.sequence = sequence
        self.identifier = identifier
        super().__init__(f"{sequence}: identifier {identifier!r} already exists")


class ExhaustedRetries(AllocationError):
    code = "exhausted_retries"

    def __init__(self, sequence: str, attempts: int):
        self.sequence = sequence
        self.attempts = attempts
        super().__init__(
            f"{sequence}: unable to allocate a unique identifier after {attempts} attempt(s)"
        )


class RangeExceeded(AllocationError):
    """
    The numeric sequence ran past its upper bound (e.g. 999 for users).

    Kept distinct from ExhaustedRetries: this one needs an operator, not a retry.
    """

    code = "range_exceeded"

    def __init__(self, sequence: str, candidate: int, max_value: int):
        self.sequence = sequence
        self.candidate = candidate
        self.max_value = max_value
        super().__init__(
            f"{sequence}: maximum identifier limit reached ({max_value}), next would be {candidate}"
        )


class StoreUnavailable(AllocationError):
    code = "store_unavailable"

    def __init__(self, operation: str, cause: Optional[BaseException] = None):
        self.operation = operation
        self.cause = cause
        detail = f": {cause}" if cause is not None else ""
        super().__init__(f"backing store failed during {operation}{detail}")


class InvalidIdentifier(ValueError):
    code = "invalid_identifier"

    def __init__(self, raw: Any, expected: str):
        self.raw = raw
        self.expected = expected
        super().__init__(f"Invalid identifier {raw!r}, expected {expected}")
