"""User repository port."""

from __future__ import annotations

import abc

from orderdesk.domain.aggregates import User
from orderdesk.domain.value_objects import Email, UserId


class UserRepository(abc.ABC):
    """Persistence contract for User aggregates.

    Versioning follows the same rules as `OrderRepository.save`.
    """

    @abc.abstractmethod
    def get(self, user_id: UserId) -> User:
        """Load a user.

        Raises:
            AggregateNotFoundError: If no user has this id.
        """

    @abc.abstractmethod
    def find_by_email(self, email: Email) -> User | None:
        """Return the user registered with `email`, if any."""

    @abc.abstractmethod
    def save(self, user: User) -> None:
        """Insert or update a user.

        Raises:
            ConcurrencyConflictError: If the stored user has moved on since it
                was loaded, or a new user's id is already taken.
        """
