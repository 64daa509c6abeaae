"""Unit tests for the user handlers."""

import pytest

from orderdesk.domain import errors
from orderdesk.domain.aggregates import UserStatus
from orderdesk.domain.value_objects import Email, UserId
from orderdesk.interfaces.repositories import AggregateNotFoundError
from orderdesk.service_layer import commands
from orderdesk.service_layer.errors import EmailAlreadyRegisteredError

from .base import HandlerTestBase

# pylint: disable=magic-value-comparison


class TestRegisterUser(HandlerTestBase):
    """Tests for register_user."""

    def test_registers_and_returns_id(self):
        """The new user is saved, its event published and the id returned."""
        user_id = self.register(" Ada Lovelace ", "ADA@example.com")

        self.assert_committed()
        with self.bus.uow as uow:
            user = uow.users.get(UserId.of(user_id))
        assert user.name.value == "Ada Lovelace"
        assert user.email.value == "ada@example.com"
        assert user.version == 1
        assert self.event_types(user_id) == ["UserRegistered"]

    def test_duplicate_email_rejected(self):
        """A second user with the same email (any case) is rejected."""
        self.register()
        self.reset_committed()

        with pytest.raises(EmailAlreadyRegisteredError, match="ada@example.com"):
            self.register("Someone Else", "Ada@Example.com")
        self.assert_not_committed()

    def test_invalid_email_rejected(self):
        """Malformed input is rejected before anything is stored."""
        with pytest.raises(errors.InvalidFormatError):
            self.register(email="not-an-email")
        self.assert_not_committed()
        with self.bus.uow as uow:
            assert not list(uow.eventstore.read_since())


class TestUserChanges(HandlerTestBase):
    """Tests for rename, change-email and deactivate."""

    user_id: str

    def _seed_bus(self, request) -> None:
        self.user_id = self.register()

    def test_rename(self):
        """Renaming stores the name and appends UserRenamed."""
        self.bus.handle(commands.RenameUser(user_id=self.user_id, name="Countess"))

        self.assert_committed()
        with self.bus.uow as uow:
            user = uow.users.get(UserId.of(self.user_id))
        assert user.name.value == "Countess"
        assert user.version == 2
        assert self.event_types(self.user_id) == ["UserRegistered", "UserRenamed"]

    def test_rename_to_same_name_publishes_nothing(self):
        """A no-op rename saves but appends no event."""
        self.bus.handle(commands.RenameUser(user_id=self.user_id, name="Ada Lovelace"))
        assert self.event_types(self.user_id) == ["UserRegistered"]

    def test_change_email(self):
        """The email changes and UserEmailChanged is appended."""
        self.bus.handle(
            commands.ChangeUserEmail(user_id=self.user_id, email="ada@lovelace.org")
        )
        with self.bus.uow as uow:
            assert uow.users.find_by_email(Email.of("ada@lovelace.org")) is not None
            assert uow.users.find_by_email(Email.of("ada@example.com")) is None
        assert self.event_types(self.user_id)[-1] == "UserEmailChanged"

    def test_change_email_to_own_email_is_allowed(self):
        """Re-submitting the current email is a no-op, not a conflict."""
        self.bus.handle(
            commands.ChangeUserEmail(user_id=self.user_id, email="ADA@example.com")
        )
        self.assert_committed()

    def test_change_email_to_taken_email_rejected(self):
        """Taking another user's email is rejected."""
        self.register("Grace Hopper", "grace@example.com")
        self.reset_committed()

        with pytest.raises(EmailAlreadyRegisteredError):
            self.bus.handle(
                commands.ChangeUserEmail(user_id=self.user_id, email="grace@example.com")
            )
        self.assert_not_committed()

    def test_deactivate(self):
        """Deactivation is stored and UserDeactivated appended."""
        self.bus.handle(commands.DeactivateUser(user_id=self.user_id))
        with self.bus.uow as uow:
            assert uow.users.get(UserId.of(self.user_id)).status is UserStatus.DEACTIVATED
        assert self.event_types(self.user_id)[-1] == "UserDeactivated"

    def test_deactivate_twice_rejected(self):
        """A deactivated user cannot be deactivated again."""
        self.bus.handle(commands.DeactivateUser(user_id=self.user_id))
        self.reset_committed()
        with pytest.raises(errors.InvalidStateTransitionError):
            self.bus.handle(commands.DeactivateUser(user_id=self.user_id))
        self.assert_not_committed()

    def test_unknown_user(self):
        """Commands for unknown users raise AggregateNotFoundError."""
        with pytest.raises(AggregateNotFoundError):
            self.bus.handle(
                commands.RenameUser(user_id=str(UserId.generate()), name="Nobody")
            )
