"""
User model.

A User is identified in the store by ``id`` but deduplicated by its
natural key (name, surname, age): no two persisted users may share it.
The job reference is optional and many users may share one Job row.
"""

from typing import Any, Dict, Optional, Tuple
from sqlalchemy import ForeignKey, String, Integer, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship

from ujr.models.base import Base, BaseModel
from ujr.models.job import Job, same_job
from ujr.core.constants import (
    USER_NAME_MAX_LENGTH,
    USER_SURNAME_MAX_LENGTH,
    USER_NATURAL_KEY_CONSTRAINT,
)


class User(BaseModel, Base):
    """
    Registered user.

    Attributes:
        id: Auto-incrementing primary key (assigned by the store)
        name: First name
        surname: Last name
        age: Age in years
        job_id: Foreign key to jobs.id, NULL when the user has no job
        job: The referenced Job, or None
        created_at: When the row was inserted (from BaseModel)
        updated_at: When the row was last modified (from BaseModel)

    Example:
        user = User(name="Ivan", surname="Petrov", age=30,
                    job=Job(name="engineer", salary=1000))
        user_id = service.save(user)
    """

    __tablename__ = "users"

    # ========================================
    # Primary Key
    # ========================================

    id: Mapped[int] = mapped_column(
        Integer,
        primary_key=True,
        autoincrement=True,
        comment="Auto-incrementing primary key"
    )

    # ========================================
    # Natural Key
    # ========================================

    name: Mapped[str] = mapped_column(
        String(USER_NAME_MAX_LENGTH),
        nullable=False,
        comment="First name"
    )

    surname: Mapped[str] = mapped_column(
        String(USER_SURNAME_MAX_LENGTH),
        nullable=False,
        comment="Last name"
    )

    age: Mapped[int] = mapped_column(
        Integer,
        nullable=False,
        comment="Age in years"
    )

    # ========================================
    # Job Reference
    # ========================================

    job_id: Mapped[Optional[int]] = mapped_column(
        ForeignKey("jobs.id"),
        nullable=True,
        index=True,  # Orphan checks count users by job
        comment="Shared job, NULL when unemployed"
    )

    # No backref: jobs never cascade users into the session.
    job: Mapped[Optional[Job]] = relationship(Job)

    __table_args__ = (
        UniqueConstraint("name", "surname", "age", name=USER_NATURAL_KEY_CONSTRAINT),
        {"comment": "Registered users"}
    )

    def __init__(self, **kwargs):
        """
        Initialize a User with validation.

        Raises:
            ValueError: If name or surname is empty, or age is negative
        """
        super().__init__(**kwargs)

        if not self.name or not self.name.strip():
            raise ValueError("User name cannot be empty")

        if not self.surname or not self.surname.strip():
            raise ValueError("User surname cannot be empty")

        if self.age is None or self.age < 0:
            raise ValueError(f"User age must be non-negative, got {self.age}")

    # ========================================
    # Natural-Key Equality
    # ========================================

    def natural_key(self) -> Tuple[str, str, int]:
        """Return the (name, surname, age) triple used for deduplication."""
        return (self.name, self.surname, self.age)

    def same_data(self, other: "User") -> bool:
        """
        Check full equality with another user, ignoring ids.

        Full equality means the same natural key and the same job
        (compared by the job's natural key).
        """
        return (
            self.natural_key() == other.natural_key()
            and same_job(self.job, other.job)
        )

    def to_dict(self, exclude: Optional[set] = None) -> Dict[str, Any]:
        """Serialize the user with its job nested under ``job``."""
        result = super().to_dict(exclude)
        result["job"] = self.job.to_dict() if self.job is not None else None
        return result

    def __repr__(self) -> str:
        return (
            f"<User(id={self.id}, name='{self.name}', surname='{self.surname}', "
            f"age={self.age}, job={self.job!r})>"
        )

    def __str__(self) -> str:
        job = str(self.job) if self.job is not None else "no job"
        return f"{self.name} {self.surname}, {self.age}: {job}"


def same_user(first: Optional[User], second: Optional[User]) -> bool:
    """Compare two optional users by natural key only."""
    if first is None or second is None:
        return first is None and second is None
    return first.natural_key() == second.natural_key()
