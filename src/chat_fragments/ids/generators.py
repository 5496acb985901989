from datetime import UTC, datetime
from uuid import uuid4


class UuidIdGenerator:
    """Fragment id generator backed by random UUIDs.

    Ids are the leading hex characters of a UUID4, so they are only meant to
    be unique within one message.
    """

    def __init__(self, length: int = 8) -> None:
        if not 1 <= length <= 32:
            raise ValueError(f"length must be between 1 and 32, got {length}")
        self._length = length

    def __call__(self, scope: str) -> str:
        """Return a fresh id. The scope is accepted for protocol compatibility."""
        return uuid4().hex[: self._length]


class SystemClock:
    """Wall clock in epoch milliseconds."""

    def __call__(self) -> int:
        return int(datetime.now(UTC).timestamp() * 1000)
