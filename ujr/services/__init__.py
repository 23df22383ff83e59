"""
Services Package
================

Business-facing layer of the registry. Services delegate to
repositories and leave transaction control to the caller.

Available services:
- UsersService: save, delete, list, get and update users
"""

from ujr.services.users import UsersService, get_users_service

__all__ = [
    "UsersService",
    "get_users_service",
]
