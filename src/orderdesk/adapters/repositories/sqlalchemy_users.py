"""SQLAlchemy Core repository for User aggregates."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from sqlalchemy import RowMapping, insert, select, update
from sqlalchemy.exc import IntegrityError

from orderdesk.domain.aggregates import User
from orderdesk.domain.value_objects import Email, Name, UserId
from orderdesk.interfaces.repositories import (
    AggregateNotFoundError,
    ConcurrencyConflictError,
    UserRepository,
)

from .schema import users

if TYPE_CHECKING:
    from sqlalchemy.engine import Connection

logger = logging.getLogger(__name__)


class SqlAlchemyUserRepository(UserRepository):
    """UserRepository backed by the ``users`` table."""

    def __init__(self, connection: Connection):
        self.connection = connection

    def get(self, user_id: UserId) -> User:
        stmt = select(users).where(users.c.user_id == str(user_id))
        if (row := self.connection.execute(stmt).mappings().one_or_none()) is None:
            raise AggregateNotFoundError("User", str(user_id))
        return self._to_aggregate(row)

    def find_by_email(self, email: Email) -> User | None:
        stmt = select(users).where(users.c.email == email.value)
        if (row := self.connection.execute(stmt).mappings().one_or_none()) is None:
            return None
        return self._to_aggregate(row)

    def save(self, user: User) -> None:
        values = {
            "name": user.name.value,
            "email": user.email.value,
            "status": user.status.value,
            "created_at": user.created_at,
            "updated_at": user.updated_at,
            "version": user.version + 1,
        }

        try:
            if user.version == 0:
                self.connection.execute(
                    insert(users).values(user_id=user.aggregate_id, **values)
                )
                updated = 1
            else:
                updated = self.connection.execute(
                    update(users)
                    .where(
                        users.c.user_id == user.aggregate_id,
                        users.c.version == user.version,
                    )
                    .values(**values)
                ).rowcount
        # duplicate id, or an email claimed by a concurrent registration
        except IntegrityError as e:
            raise ConcurrencyConflictError("User", user.aggregate_id, user.version) from e

        if updated != 1:
            raise ConcurrencyConflictError("User", user.aggregate_id, user.version)

        user.advance_version()
        logger.debug("Saved user %s at version %d", user.aggregate_id, user.version)

    @staticmethod
    def _to_aggregate(row: RowMapping) -> User:
        return User.reconstruct(
            user_id=UserId.of(row["user_id"]),
            name=Name.of(row["name"]),
            email=Email.of(row["email"]),
            status=row["status"],
            created_at=row["created_at"],
            updated_at=row["updated_at"],
            version=row["version"],
        )
