"""ID generators for ORDERDESK event ids."""

import threading

from ulid import monotonic

from orderdesk.interfaces.id_generator import IdGenerator

# pylint: disable=too-few-public-methods


class ULIDGenerator(IdGenerator):
    """Thread-safe monotonic ULID generator.

    ULIDs are 26-character, lexicographically sortable identifiers; ids made
    within the same millisecond still sort in creation order.
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()

    def new_id(self) -> str:
        """Generate a new ULID (serialized across threads)."""
        with self._lock:
            return str(monotonic.new())


class SimpleIdGenerator(IdGenerator):
    """Sequential, zero-padded ids (``00000000000000000000000001`` ...).

    Deterministic; meant for tests and demos.
    """

    def __init__(self, length: int = 26) -> None:
        self._counter = 0
        self._length = length

    def new_id(self) -> str:
        """Generate the next id in the sequence."""
        self._counter += 1
        return f"{self._counter:0{self._length}d}"
