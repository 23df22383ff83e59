"""
Database models package.

Contains all SQLAlchemy ORM models.
"""

from ujr.models.base import Base, BaseModel, create_all_tables, drop_all_tables
from ujr.models.job import Job, same_job
from ujr.models.user import User, same_user

__all__ = [
    "Base",
    "BaseModel",
    "Job",
    "User",
    "same_job",
    "same_user",
    "create_all_tables",
    "drop_all_tables",
]
