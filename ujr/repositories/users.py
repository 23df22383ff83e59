"""
User repository.

All queries against the users and jobs tables live here, together
with the three consistency rules of the registry:

1. Users are unique by (name, surname, age).
2. A job matching a persisted job by (name, salary) reuses that row.
3. A job referenced by no user after a delete or update is removed.

Orphans are detected with a count query after the mutation is
flushed. There is no stored reference counter.

The repository flushes but never commits. Callers own the
transaction (see ``ujr.database.get_db_context``).
"""

import logging
from typing import List, Optional

from sqlalchemy import func, inspect
from sqlalchemy.orm import Session, joinedload

from ujr.core.exceptions import UserAlreadyExistsError, UserNotFoundError
from ujr.models.job import Job, same_job
from ujr.models.user import User

logger = logging.getLogger(__name__)


class UserRepository:
    """
    Data access for users and the jobs they share.

    Example:
        with get_db_context() as db:
            repo = UserRepository(db)
            user_id = repo.save(User(name="Ivan", surname="Petrov", age=30))
    """

    def __init__(self, db: Session):
        """
        Initialize the repository.

        Args:
            db: Database session (transaction owned by the caller)
        """
        self.db = db

    # ========================================
    # Lookups
    # ========================================

    def get_user_by_id(self, user_id: int) -> Optional[User]:
        """Return the user with this id, or None if absent."""
        return self.db.get(User, user_id)

    def list_users(self) -> List[User]:
        """Return every user with its job loaded in the same query."""
        return (
            self.db.query(User)
            .options(joinedload(User.job))
            .order_by(User.id)
            .all()
        )

    def list_jobs(self) -> List[Job]:
        """Return every persisted job."""
        return self.db.query(Job).order_by(Job.id).all()

    def find_user(self, name: str, surname: str, age: int,
                  exclude_id: Optional[int] = None) -> Optional[User]:
        """
        Find a user by natural key.

        Args:
            name: First name
            surname: Last name
            age: Age in years
            exclude_id: Ignore the user with this id (the row being updated)

        Returns:
            Matching User or None
        """
        query = self.db.query(User).filter_by(name=name, surname=surname, age=age)
        if exclude_id is not None:
            query = query.filter(User.id != exclude_id)
        return query.first()

    def find_job(self, name: str, salary: int) -> Optional[Job]:
        """Find a persisted job by natural key."""
        return self.db.query(Job).filter_by(name=name, salary=salary).first()

    def count_users_with_job(self, job: Job) -> int:
        """Count users currently referencing ``job``."""
        return (
            self.db.query(func.count(User.id))
            .filter(User.job_id == job.id)
            .scalar()
        )

    # ========================================
    # Mutations
    # ========================================

    def save(self, user: User) -> int:
        """
        Insert a new user.

        The user's job is replaced by the persisted job with the same
        (name, salary) when one exists. A rejected user is left as it
        was passed in.

        Args:
            user: Transient User, optionally carrying a transient Job

        Returns:
            The id assigned by the store

        Raises:
            UserAlreadyExistsError: If (name, surname, age) is taken
        """
        existing_job = None
        if user.job is not None:
            existing_job = self.find_job(user.job.name, user.job.salary)

        if self.find_user(user.name, user.surname, user.age) is not None:
            raise UserAlreadyExistsError(user)

        if existing_job is not None:
            logger.debug("Reusing %r for new user", existing_job)
            user.job = existing_job

        self.db.add(user)
        self.db.flush()  # Assigns the id
        return user.id

    def delete(self, user_id: int) -> bool:
        """
        Delete a user, and its job if no other user references it.

        Missing ids are ignored.

        Returns:
            True if a user row was removed
        """
        user = self.get_user_by_id(user_id)
        if user is None:
            return False

        job = user.job
        self.db.delete(user)
        self.db.flush()

        if job is not None:
            self._remove_if_orphan(job)
        return True

    def update(self, user_id: int, user: User) -> None:
        """
        Overwrite a user's fields and job with those of ``user``.

        ``user`` is either a transient User carrying the new values (its
        id is ignored), or the instance loaded for ``user_id`` from this
        session with its attributes edited in place.

        Args:
            user_id: Id of the persisted user to change
            user: New values for the user

        Raises:
            UserNotFoundError: If no user has ``user_id``
            UserAlreadyExistsError: If another user already has the new
                (name, surname, age); nothing is changed in that case
            ValueError: If ``user`` belongs to this session but is not
                the user being updated
        """
        target = self.get_user_by_id(user_id)
        if target is None:
            raise UserNotFoundError(user_id)

        if user is target:
            user = self._take_pending_changes(target)
        elif user in self.db:
            raise ValueError(
                f"Cannot update user {user_id} from {user!r}: "
                "pass a transient user or the loaded user itself"
            )

        if target.same_data(user):
            return

        new_job = target.job
        old_job = None
        if not same_job(target.job, user.job):
            new_job = self._resolve_job(user.job)
            old_job = target.job

        if self.find_user(user.name, user.surname, user.age, exclude_id=target.id) is not None:
            raise UserAlreadyExistsError(user)

        target.name = user.name
        target.surname = user.surname
        target.age = user.age
        target.job = new_job
        self.db.flush()

        if old_job is not None:
            self._remove_if_orphan(old_job)

    # ========================================
    # Helpers
    # ========================================

    def _take_pending_changes(self, target: User) -> User:
        """
        Move unflushed edits of ``target`` onto a transient copy.

        ``target`` (and its job, if that was edited or newly attached) is
        reverted to the stored state so the edits only reach the store
        through the checks in ``update``.
        """
        job = target.job
        pending = User(
            name=target.name,
            surname=target.surname,
            age=target.age,
            job=Job(name=job.name, salary=job.salary) if job is not None else None,
        )

        if job is not None:
            job_state = inspect(job)
            if job_state.pending:
                self.db.expunge(job)
            elif job_state.persistent and self.db.is_modified(job):
                self.db.refresh(job)

        self.db.refresh(target)
        return pending

    def _resolve_job(self, job: Optional[Job]) -> Optional[Job]:
        """Return the persisted job matching ``job``, or a new unsaved copy."""
        if job is None:
            return None

        existing_job = self.find_job(job.name, job.salary)
        if existing_job is not None:
            logger.debug("Reusing %r for updated user", existing_job)
            return existing_job

        return Job(name=job.name, salary=job.salary)

    def _remove_if_orphan(self, job: Job) -> None:
        """Delete ``job`` when no user references it any more."""
        if self.count_users_with_job(job) == 0:
            logger.debug("Deleting orphan %r", job)
            self.db.delete(job)
            self.db.flush()
