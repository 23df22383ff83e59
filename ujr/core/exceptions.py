"""
Error taxonomy for the registry.

Only natural-key collisions and updates of missing users are raised
here. Store failures (connectivity, IntegrityError) propagate from
SQLAlchemy untouched, and reads of missing ids return None.
"""


class RegistryError(Exception):
    """Base class for registry errors."""


class UserAlreadyExistsError(RegistryError):
    """
    A user with the same (name, surname, age) is already persisted.

    Attributes:
        user: The user that could not be saved or applied
    """

    def __init__(self, user):
        self.user = user
        super().__init__(f"User {user!r} was already saved in the database")


class UserNotFoundError(RegistryError, LookupError):
    """An update targeted a user id that does not exist."""

    def __init__(self, user_id: int):
        self.user_id = user_id
        super().__init__(f"User not found: {user_id}")
