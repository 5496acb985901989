from typing import Protocol


class IdGenerator(Protocol):
    """Protocol for producing fresh identifiers within a namespace."""

    def __call__(self, scope: str) -> str:
        """Return an id unique within the enclosing container.

        Args:
            scope: Namespace tag, e.g. "chat-dfragment".

        Returns:
            A fresh identifier string. Must be safe to call concurrently.
        """
        ...


class Clock(Protocol):
    """Protocol for the current-time source."""

    def __call__(self) -> int:
        """Return the current time in epoch milliseconds."""
        ...
