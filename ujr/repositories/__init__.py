"""
Data access layer (Repository pattern).

Repositories handle all database queries,
isolating business logic from SQL.
"""

from ujr.repositories.users import UserRepository

__all__ = [
    "UserRepository",
]
