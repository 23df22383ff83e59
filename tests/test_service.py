"""
Tests for UsersService - delegation, error signals and transactions.
"""

import logging
from unittest.mock import MagicMock

import pytest

from ujr.core.exceptions import UserAlreadyExistsError, UserNotFoundError
from ujr.database import get_db_context
from ujr.models import Job, User
from ujr.repositories import UserRepository
from ujr.services import UsersService, get_users_service


class TestDelegation:
    """Each operation passes straight through to the repository."""

    @pytest.fixture
    def repository(self):
        return MagicMock(spec=UserRepository)

    @pytest.fixture
    def service(self, repository):
        return UsersService(db=MagicMock(), repository=repository)

    def test_save(self, service, repository, make_user):
        repository.save.return_value = 7
        user = make_user()

        assert service.save(user) == 7
        repository.save.assert_called_once_with(user)

    def test_delete(self, service, repository):
        service.delete(3)
        repository.delete.assert_called_once_with(3)

    def test_list_users(self, service, repository):
        repository.list_users.return_value = []
        assert service.list_users() == []

    def test_get_user_by_id(self, service, repository):
        repository.get_user_by_id.return_value = None
        assert service.get_user_by_id(3) is None
        repository.get_user_by_id.assert_called_once_with(3)

    def test_update(self, service, repository, make_user):
        user = make_user()
        service.update(3, user)
        repository.update.assert_called_once_with(3, user)

    def test_update_missing_user_propagates(self, service, repository, make_user):
        repository.update.side_effect = UserNotFoundError(3)

        with pytest.raises(UserNotFoundError):
            service.update(3, make_user())

    def test_factory_builds_repository(self, db_session):
        service = get_users_service(db_session)

        assert isinstance(service.repository, UserRepository)
        assert service.repository.db is db_session


class TestLogging:
    """Mutations are logged; duplicates are logged as warnings."""

    def test_save_logged(self, db_session, make_user, caplog):
        service = get_users_service(db_session)

        with caplog.at_level(logging.INFO, logger="ujr"):
            user_id = service.save(make_user())

        assert f"Saved user {user_id}" in caplog.text

    def test_duplicate_logged_and_reraised(self, db_session, make_user, caplog):
        service = get_users_service(db_session)
        service.save(make_user())

        with caplog.at_level(logging.WARNING, logger="ujr"):
            with pytest.raises(UserAlreadyExistsError):
                service.save(make_user())

        assert "Rejected duplicate user Ivan Petrov (30)" in caplog.text

    def test_delete_logged_only_when_removed(self, db_session, make_user, caplog):
        service = get_users_service(db_session)
        user_id = service.save(make_user())

        with caplog.at_level(logging.DEBUG, logger="ujr"):
            service.delete(user_id)
            service.delete(user_id)

        assert f"Deleted user {user_id}" in caplog.text
        assert f"No user {user_id} to delete" in caplog.text
        assert caplog.text.count("Deleted user") == 1


class TestTransactions:
    """Operations run inside the caller's get_db_context() scope."""

    def test_committed_state_visible_in_new_transaction(self, session_factory, make_user):
        with get_db_context(session_factory) as db:
            user_id = get_users_service(db).save(make_user(job_name="engineer", salary=1000))

        with get_db_context(session_factory) as db:
            user = get_users_service(db).get_user_by_id(user_id)
            assert user.job.natural_key() == ("engineer", 1000)

    def test_orphan_job_gone_after_update_commits(self, session_factory, make_user):
        with get_db_context(session_factory) as db:
            user_id = get_users_service(db).save(make_user(job_name="engineer", salary=1000))

        with get_db_context(session_factory) as db:
            get_users_service(db).update(user_id, make_user(job_name="manager", salary=1500))

        with get_db_context(session_factory) as db:
            jobs = db.query(Job).all()
            assert [job.natural_key() for job in jobs] == [("manager", 1500)]

    def test_failed_update_rolls_back(self, session_factory, make_user):
        with get_db_context(session_factory) as db:
            service = get_users_service(db)
            service.save(make_user())
            other_id = service.save(make_user(name="Anna", surname="Smirnova", age=27))

        with pytest.raises(UserAlreadyExistsError):
            with get_db_context(session_factory) as db:
                get_users_service(db).update(other_id, make_user())

        with get_db_context(session_factory) as db:
            names = sorted(user.name for user in db.query(User).all())
            assert names == ["Anna", "Ivan"]

    def test_list_users_survives_session_close(self, session_factory, make_user):
        with get_db_context(session_factory) as db:
            get_users_service(db).save(make_user(job_name="engineer", salary=1000))

        with get_db_context(session_factory) as db:
            users = get_users_service(db).list_users()
            db.expunge_all()

        assert users[0].job.name == "engineer"

    def test_loaded_user_job_change_cleans_up_after_commit(self, session_factory, make_user):
        with get_db_context(session_factory) as db:
            user_id = get_users_service(db).save(make_user(job_name="engineer", salary=1000))

        with get_db_context(session_factory) as db:
            service = get_users_service(db)
            user = service.get_user_by_id(user_id)
            user.job = Job(name="manager", salary=1500)
            service.update(user_id, user)

        with get_db_context(session_factory) as db:
            jobs = db.query(Job).all()
            assert [job.natural_key() for job in jobs] == [("manager", 1500)]

    def test_loaded_user_collision_raises_domain_error(self, session_factory, make_user):
        with get_db_context(session_factory) as db:
            service = get_users_service(db)
            service.save(make_user())
            other_id = service.save(make_user(name="Anna", surname="Smirnova", age=27))

        with pytest.raises(UserAlreadyExistsError):
            with get_db_context(session_factory) as db:
                service = get_users_service(db)
                other = service.get_user_by_id(other_id)
                other.name, other.surname, other.age = "Ivan", "Petrov", 30
                service.update(other_id, other)

        with get_db_context(session_factory) as db:
            names = sorted(user.name for user in db.query(User).all())
            assert names == ["Anna", "Ivan"]
