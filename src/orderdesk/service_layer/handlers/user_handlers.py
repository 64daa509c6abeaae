"""Handlers for the user use cases."""

import logging
from collections.abc import Callable

from orderdesk.domain.aggregates import User
from orderdesk.domain.value_objects import Email, Name, UserId
from orderdesk.interfaces.id_generator import IdGenerator
from orderdesk.interfaces.unit_of_work import AbstractUnitOfWork
from orderdesk.service_layer import commands
from orderdesk.service_layer.errors import EmailAlreadyRegisteredError
from orderdesk.service_layer.publishing import publish_pending_events

logger = logging.getLogger(__name__)


def register_user(
    cmd: commands.RegisterUser,
    uow: AbstractUnitOfWork,
    event_id_generator: IdGenerator,
) -> str:
    """Register a new user and return its id.

    Raises:
        EmailAlreadyRegisteredError: If another user already uses the email.
    """

    name, email = Name.of(cmd.name), Email.of(cmd.email)

    with uow:
        if uow.users.find_by_email(email) is not None:
            raise EmailAlreadyRegisteredError(email.value)
        user = User.register(name, email)
        uow.users.save(user)
        publish_pending_events(uow, event_id_generator, user)
        uow.commit()

    logger.info("Registered user %s <%s>", user.user_id, email)
    return str(user.user_id)


def rename_user(
    cmd: commands.RenameUser,
    uow: AbstractUnitOfWork,
    event_id_generator: IdGenerator,
) -> None:
    """Change a user's display name."""

    user_id, name = UserId.of(cmd.user_id), Name.of(cmd.name)

    with uow:
        user = uow.users.get(user_id)
        user.rename(name)
        uow.users.save(user)
        publish_pending_events(uow, event_id_generator, user)
        uow.commit()

    logger.info("Renamed user %s to %r", user_id, name.value)


def change_user_email(
    cmd: commands.ChangeUserEmail,
    uow: AbstractUnitOfWork,
    event_id_generator: IdGenerator,
) -> None:
    """Change a user's email address.

    Raises:
        EmailAlreadyRegisteredError: If another user already uses the email.
    """

    user_id, email = UserId.of(cmd.user_id), Email.of(cmd.email)

    with uow:
        user = uow.users.get(user_id)
        owner = uow.users.find_by_email(email)
        if owner is not None and owner.aggregate_id != user.aggregate_id:
            raise EmailAlreadyRegisteredError(email.value)
        user.change_email(email)
        uow.users.save(user)
        publish_pending_events(uow, event_id_generator, user)
        uow.commit()

    logger.info("Changed email of user %s", user_id)


def deactivate_user(
    cmd: commands.DeactivateUser,
    uow: AbstractUnitOfWork,
    event_id_generator: IdGenerator,
) -> None:
    """Deactivate a user."""

    user_id = UserId.of(cmd.user_id)

    with uow:
        user = uow.users.get(user_id)
        user.deactivate()
        uow.users.save(user)
        publish_pending_events(uow, event_id_generator, user)
        uow.commit()

    logger.info("Deactivated user %s", user_id)


COMMAND_HANDLERS: dict[type, Callable[..., str | None]] = {
    commands.RegisterUser: register_user,
    commands.RenameUser: rename_user,
    commands.ChangeUserEmail: change_user_email,
    commands.DeactivateUser: deactivate_user,
}
