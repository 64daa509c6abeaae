"""Repository-related error definitions."""


class RepositoryError(Exception):
    """Base class for repository-related errors."""


class AggregateNotFoundError(RepositoryError):
    """Raised when an aggregate cannot be found in its repository."""

    aggregate_id: str
    aggregate_type_name: str

    def __init__(self, aggregate_type_name: str, aggregate_id: str):
        super().__init__(f"{aggregate_type_name} with ID {aggregate_id} not found.")
        self.aggregate_type_name = aggregate_type_name
        self.aggregate_id = aggregate_id


class ConcurrencyConflictError(RepositoryError):
    """Raised when a save is based on a stale version of the aggregate.

    Attributes:
        aggregate_type_name (str): The aggregate class name (e.g. "Order").
        aggregate_id (str): The aggregate's identity.
        expected_version (int): The version the caller loaded.
    """

    def __init__(
        self, aggregate_type_name: str, aggregate_id: str, expected_version: int
    ):
        super().__init__(
            f"{aggregate_type_name} with ID {aggregate_id} was modified concurrently "
            f"(expected version {expected_version})."
        )
        self.aggregate_type_name = aggregate_type_name
        self.aggregate_id = aggregate_id
        self.expected_version = expected_version
