"""
Users service.

Thin facade over ``UserRepository`` exposing the five registry
operations to callers. It adds logging and nothing else: errors
raised by the repository (``UserAlreadyExistsError``,
``UserNotFoundError``) and by SQLAlchemy reach the caller unchanged.

Transactions belong to the caller:

    with get_db_context() as db:
        service = get_users_service(db)
        user_id = service.save(user)
"""

import logging
from typing import List, Optional

from sqlalchemy.orm import Session

from ujr.core.exceptions import UserAlreadyExistsError
from ujr.models.user import User
from ujr.repositories.users import UserRepository

logger = logging.getLogger(__name__)


class UsersService:
    """Service for saving, listing, updating and deleting users."""

    def __init__(self, db: Session, repository: Optional[UserRepository] = None):
        """
        Initialize the users service.

        Args:
            db: Database session
            repository: Repository to delegate to (built from ``db`` if omitted)
        """
        self.db = db
        self.repository = repository or UserRepository(db)

    def save(self, user: User) -> int:
        """
        Save a new user and return its id.

        Raises:
            UserAlreadyExistsError: If (name, surname, age) is already taken
        """
        try:
            user_id = self.repository.save(user)
        except UserAlreadyExistsError as exc:
            logger.warning("Rejected duplicate user %s %s (%s)",
                           exc.user.name, exc.user.surname, exc.user.age)
            raise

        logger.info("Saved user %s", user_id)
        return user_id

    def delete(self, user_id: int) -> None:
        """Delete a user; missing ids are ignored."""
        if self.repository.delete(user_id):
            logger.info("Deleted user %s", user_id)
        else:
            logger.debug("No user %s to delete", user_id)

    def list_users(self) -> List[User]:
        """Return all users with their jobs."""
        return self.repository.list_users()

    def get_user_by_id(self, user_id: int) -> Optional[User]:
        """Return the user with this id, or None."""
        return self.repository.get_user_by_id(user_id)

    def update(self, user_id: int, user: User) -> None:
        """
        Replace a user's fields and job.

        Raises:
            UserAlreadyExistsError: If another user has the new (name, surname, age)
            UserNotFoundError: If ``user_id`` does not exist
            ValueError: If ``user`` is a different user loaded in this session
        """
        try:
            self.repository.update(user_id, user)
        except UserAlreadyExistsError as exc:
            logger.warning("Rejected update of user %s: %s %s (%s) is taken",
                           user_id, exc.user.name, exc.user.surname, exc.user.age)
            raise

        logger.info("Updated user %s", user_id)


# ========================================
# Convenience Functions
# ========================================

def get_users_service(db: Session) -> UsersService:
    """
    Factory function for creating UsersService.

    Args:
        db: Database session

    Returns:
        UsersService instance
    """
    return UsersService(db)
