"""Application-level errors raised by service layer handlers."""


class ServiceError(Exception):
    """Base class for application rule violations."""


class EmailAlreadyRegisteredError(ServiceError):
    """Raised when registering or switching to an email that another user holds."""

    def __init__(self, email: str) -> None:
        super().__init__(f"Email {email} is already registered.")
        self.email = email


class InactiveUserError(ServiceError):
    """Raised when a deactivated user tries to place an order."""

    def __init__(self, user_id: str) -> None:
        super().__init__(f"User {user_id} is deactivated and cannot place orders.")
        self.user_id = user_id
