"""Aggregate representing a registered user."""

from __future__ import annotations

from datetime import datetime
from enum import Enum
from typing import ClassVar

from orderdesk.domain import errors, events
from orderdesk.domain.utils import require_instance, require_utc, utc_now
from orderdesk.domain.value_objects import Email, Name, UserId

from .base import Aggregate

# pylint: disable=too-many-arguments


class UserStatus(Enum):
    """Enumeration of possible User statuses."""

    ACTIVE = "active"
    DEACTIVATED = "deactivated"


class User(Aggregate):
    """Aggregate root representing a user who can place orders.

    Users start ACTIVE and may be deactivated once; a deactivated user can no
    longer be changed.
    """

    STREAM_TYPE: ClassVar[str] = "User"

    def __init__(
        self,
        user_id: UserId,
        name: Name,
        email: Email,
        created_at: datetime,
        *,
        version: int = 0,
    ) -> None:
        super().__init__(str(user_id), version)
        self._user_id = user_id
        self._name = name
        self._email = email
        self._status = UserStatus.ACTIVE
        self._created_at = created_at
        self._updated_at = created_at

    # --- Construction Paths ---

    @classmethod
    def register(cls, name: Name, email: Email) -> User:
        """Register a new active user.

        Returns:
            User: The new user, holding a single `UserRegistered` event.

        Raises:
            MissingFieldError: If `name` or `email` is missing.
        """

        require_instance("name", name, Name)
        require_instance("email", email, Email)
        now = utc_now()
        user = cls(UserId.generate(), name, email, now)
        user._record(
            events.UserRegistered(
                user_id=user.user_id, name=name, email=email, occurred_at=now
            )
        )
        return user

    @classmethod
    def reconstruct(
        cls,
        user_id: UserId,
        name: Name,
        email: Email,
        status: UserStatus | str,
        created_at: datetime,
        updated_at: datetime,
        *,
        version: int = 0,
    ) -> User:
        """Rebuild a user from persisted state without recording events.

        Raises:
            MissingFieldError: If a required field is None.
            InvalidFormatError: If a field has the wrong type or `updated_at`
                precedes `created_at`.
        """

        require_instance("user_id", user_id, UserId)
        require_instance("name", name, Name)
        require_instance("email", email, Email)
        if status is None:
            raise errors.MissingFieldError("status")
        try:
            user_status = UserStatus(status)
        except ValueError as e:
            raise errors.InvalidFormatError(
                "status", status, "unknown user status"
            ) from e
        created = require_utc("created_at", created_at)
        updated = require_utc("updated_at", updated_at)
        if updated < created:
            raise errors.InvalidFormatError(
                "updated_at", updated_at, "must not precede created_at"
            )

        user = cls(user_id, name, email, created, version=version)
        user._status = user_status
        user._updated_at = updated
        return user

    # --- Accessors ---

    @property
    def user_id(self) -> UserId:
        return self._user_id

    @property
    def name(self) -> Name:
        return self._name

    @property
    def email(self) -> Email:
        return self._email

    @property
    def status(self) -> UserStatus:
        return self._status

    @property
    def is_active(self) -> bool:
        """Whether the user may still place and change orders."""
        return self._status is UserStatus.ACTIVE

    @property
    def created_at(self) -> datetime:
        return self._created_at

    @property
    def updated_at(self) -> datetime:
        return self._updated_at

    # --- Mutations ---

    def rename(self, name: Name) -> None:
        """Change the display name; a no-op if it is unchanged.

        Raises:
            InvalidStateTransitionError: If the user is deactivated.
        """

        self._require_active("rename")
        require_instance("name", name, Name)
        if name == self._name:
            return
        self._name = name
        self._record(
            events.UserRenamed(
                user_id=self._user_id, name=name, occurred_at=self._touch()
            )
        )

    def change_email(self, email: Email) -> None:
        """Change the email address; a no-op if it is unchanged.

        Raises:
            InvalidStateTransitionError: If the user is deactivated.
        """

        self._require_active("change the email of")
        require_instance("email", email, Email)
        if email == self._email:
            return
        self._email = email
        self._record(
            events.UserEmailChanged(
                user_id=self._user_id, email=email, occurred_at=self._touch()
            )
        )

    def deactivate(self) -> None:
        """Deactivate the user.

        Raises:
            InvalidStateTransitionError: If the user is already deactivated.
        """

        self._require_active("deactivate")
        self._status = UserStatus.DEACTIVATED
        self._record(
            events.UserDeactivated(user_id=self._user_id, occurred_at=self._touch())
        )

    # --- Internal Helpers ---

    def _require_active(self, action: str) -> None:
        if self._status is not UserStatus.ACTIVE:
            raise errors.InvalidStateTransitionError(
                self.aggregate_id, action, self._status.value
            )

    def _touch(self) -> datetime:
        self._updated_at = max(utc_now(), self._updated_at)
        return self._updated_at
