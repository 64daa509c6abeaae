"""Contract tests for UserRepository implementations."""

from __future__ import annotations

import pytest

from orderdesk.domain.aggregates import UserStatus
from orderdesk.domain.value_objects import Email, Name, UserId
from orderdesk.interfaces.repositories import (
    AggregateNotFoundError,
    ConcurrencyConflictError,
)

# pylint: disable=magic-value-comparison


def test_save_then_get_round_trips(repos, make_user):
    user = make_user("Grace Hopper", "Grace@Example.com")

    repos.users.save(user)
    loaded = repos.users.get(user.user_id)

    assert loaded.user_id == user.user_id
    assert loaded.name == Name.of("Grace Hopper")
    assert loaded.email == Email.of("grace@example.com")
    assert loaded.status is UserStatus.ACTIVE
    assert loaded.created_at == user.created_at
    assert loaded.version == 1


def test_get_unknown_user_raises(repos):
    with pytest.raises(AggregateNotFoundError, match="User with ID"):
        repos.users.get(UserId.generate())


def test_find_by_email(repos, make_user):
    user = make_user(email="ada@example.com")
    repos.users.save(user)

    found = repos.users.find_by_email(Email.of("ADA@example.com"))

    assert found is not None and found.user_id == user.user_id
    assert repos.users.find_by_email(Email.of("nobody@example.com")) is None


def test_updates_are_persisted(repos, make_user):
    user = make_user()
    repos.users.save(user)

    user = repos.users.get(user.user_id)
    user.change_email(Email.of("countess@example.com"))
    user.deactivate()
    repos.users.save(user)

    loaded = repos.users.get(user.user_id)
    assert loaded.version == 2
    assert loaded.email == Email.of("countess@example.com")
    assert loaded.status is UserStatus.DEACTIVATED
    assert repos.users.find_by_email(Email.of("ada@example.com")) is None


def test_stale_save_is_rejected(repos, make_user):
    user = make_user()
    repos.users.save(user)
    first = repos.users.get(user.user_id)
    second = repos.users.get(user.user_id)

    first.rename(Name.of("Augusta Ada King"))
    repos.users.save(first)
    second.deactivate()

    with pytest.raises(ConcurrencyConflictError):
        repos.users.save(second)
    assert repos.users.get(user.user_id).is_active


def test_email_is_unique(repos, make_user):
    repos.users.save(make_user("Ada Lovelace", "ada@example.com"))

    with pytest.raises(ConcurrencyConflictError):
        repos.users.save(make_user("Impostor", "ada@example.com"))
