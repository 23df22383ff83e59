"""
Job model.

A Job is a value shared across users: many users may point at the
same row. Rows are matched by their natural key (name, salary), never
by id, so saving two users with the same job reuses one row.

A Job has no owner. The repository deletes it once the last user
referencing it is deleted or re-pointed.
"""

from typing import Optional, Tuple
from sqlalchemy import String, Integer, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from ujr.models.base import Base, BaseModel
from ujr.core.constants import JOB_NAME_MAX_LENGTH, JOB_NATURAL_KEY_CONSTRAINT


class Job(BaseModel, Base):
    """
    Job shared by one or more users.

    Attributes:
        id: Auto-incrementing primary key
        name: Job title (e.g., "engineer")
        salary: Salary in whole currency units
        created_at: When the row was inserted (from BaseModel)
        updated_at: When the row was last modified (from BaseModel)

    Example:
        job = Job(name="engineer", salary=1000)
        user = User(name="Ivan", surname="Petrov", age=30, job=job)
    """

    __tablename__ = "jobs"

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
        String(JOB_NAME_MAX_LENGTH),
        nullable=False,
        comment="Job title"
    )

    salary: Mapped[int] = mapped_column(
        Integer,
        nullable=False,
        comment="Salary in whole currency units"
    )

    # Unique natural key closes the check-then-insert race between
    # concurrent transactions.
    __table_args__ = (
        UniqueConstraint("name", "salary", name=JOB_NATURAL_KEY_CONSTRAINT),
        {"comment": "Jobs shared between users"}
    )

    def __init__(self, **kwargs):
        """
        Initialize a Job with validation.

        Raises:
            ValueError: If name is empty or salary is negative
        """
        super().__init__(**kwargs)

        if not self.name or not self.name.strip():
            raise ValueError("Job name cannot be empty")

        if self.salary is None or self.salary < 0:
            raise ValueError(f"Job salary must be non-negative, got {self.salary}")

    def natural_key(self) -> Tuple[str, int]:
        """Return the (name, salary) pair used for deduplication."""
        return (self.name, self.salary)

    def __repr__(self) -> str:
        return f"<Job(id={self.id}, name='{self.name}', salary={self.salary})>"

    def __str__(self) -> str:
        return f"{self.name} ({self.salary})"


def same_job(first: Optional[Job], second: Optional[Job]) -> bool:
    """
    Compare two optional jobs by natural key.

    Two missing jobs are the same; a missing job never matches a
    present one.
    """
    if first is None or second is None:
        return first is None and second is None
    return first.natural_key() == second.natural_key()
