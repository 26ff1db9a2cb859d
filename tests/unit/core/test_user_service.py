"""Unit tests for UserService against an in-memory database."""

from datetime import date

import pytest

from fitness_users.core.errors import (
    DuplicateEmailError,
    InvalidStateError,
    UserNotFoundError,
)
from fitness_users.core.models.user import UserUpdateRequest
from fitness_users.core.services import UserService
from fitness_users.entities.user import User, UserRepository


class TestCreateUser:
    def test_assigns_fresh_id(self, user_service: UserService, make_user):
        created = user_service.create_user(make_user())

        assert created.id is not None
        assert user_service.get_user(created.id) == created

    def test_rejects_preassigned_id(self, user_service: UserService, make_user):
        with pytest.raises(InvalidStateError):
            user_service.create_user(make_user(id=7))

        assert user_service.find_all_users() == []

    def test_rejects_duplicate_email(self, user_service: UserService, make_user, stored_user: User):
        with pytest.raises(DuplicateEmailError) as exc_info:
            user_service.create_user(make_user(first_name="Bob", email=stored_user.email))

        assert str(exc_info.value) == f"Email {stored_user.email} is already in use."
        assert user_service.find_all_users() == [stored_user]

    def test_unique_violation_from_store_reported_as_duplicate(
        self, user_service: UserService, make_user, stored_user: User, monkeypatch
    ):
        """A writer that slips past the lookup still hits the unique index."""
        monkeypatch.setattr(UserRepository, "get_by_email", lambda self, email: None)

        with pytest.raises(DuplicateEmailError):
            user_service.create_user(make_user(first_name="Racer", email=stored_user.email))

        monkeypatch.undo()
        assert user_service.find_all_users() == [stored_user]


class TestUpdateUser:
    def test_only_email_changes(self, user_service: UserService, stored_user: User):
        updated = user_service.update_user(
            stored_user.id, UserUpdateRequest(email="new@example.com")
        )

        assert updated.email == "new@example.com"
        assert updated.first_name == stored_user.first_name
        assert updated.last_name == stored_user.last_name
        assert updated.birthdate == stored_user.birthdate
        assert user_service.get_user(stored_user.id) == updated

    def test_all_supplied_fields_applied(self, user_service: UserService, stored_user: User):
        updated = user_service.update_user(
            stored_user.id,
            UserUpdateRequest(
                first_name="Jane",
                last_name="Smith",
                birthdate=date(1985, 12, 24),
                email="jane.smith@example.com",
            ),
        )

        assert updated == User(
            id=stored_user.id,
            first_name="Jane",
            last_name="Smith",
            birthdate=date(1985, 12, 24),
            email="jane.smith@example.com",
        )

    def test_empty_update_keeps_user(self, user_service: UserService, stored_user: User):
        assert user_service.update_user(stored_user.id, UserUpdateRequest()) == stored_user

    def test_same_email_is_not_a_conflict(self, user_service: UserService, stored_user: User):
        updated = user_service.update_user(
            stored_user.id,
            UserUpdateRequest(first_name="Johnny", email=stored_user.email),
        )

        assert updated.first_name == "Johnny"
        assert updated.email == stored_user.email

    def test_email_of_other_user_is_a_conflict(
        self, user_service: UserService, make_user, stored_user: User
    ):
        other = user_service.create_user(make_user(first_name="Ann", email="ann@example.com"))

        with pytest.raises(DuplicateEmailError):
            user_service.update_user(
                stored_user.id,
                UserUpdateRequest(first_name="Changed", email=other.email),
            )

        assert user_service.get_user(stored_user.id) == stored_user

    def test_unique_violation_from_store_reported_as_duplicate(
        self, user_service: UserService, make_user, stored_user: User, monkeypatch
    ):
        other = user_service.create_user(make_user(first_name="Ann", email="ann@example.com"))
        monkeypatch.setattr(UserRepository, "get_by_email", lambda self, email: None)

        with pytest.raises(DuplicateEmailError) as exc_info:
            user_service.update_user(
                stored_user.id,
                UserUpdateRequest(first_name="Changed", email=other.email),
            )

        assert exc_info.value.email == other.email
        monkeypatch.undo()
        assert user_service.get_user(stored_user.id) == stored_user
        assert user_service.get_user(other.id) == other

    def test_missing_user(self, user_service: UserService):
        with pytest.raises(UserNotFoundError) as exc_info:
            user_service.update_user(404, UserUpdateRequest(first_name="Ghost"))

        assert exc_info.value.user_id == 404


class TestLookups:
    def test_get_user_missing_returns_none(self, user_service: UserService):
        assert user_service.get_user(1) is None

    def test_get_user_by_email(self, user_service: UserService, stored_user: User):
        assert user_service.get_user_by_email(stored_user.email) == stored_user
        assert user_service.get_user_by_email("nobody@example.com") is None

    def test_find_users_born_before(self, user_service: UserService, make_user):
        older = user_service.create_user(make_user(email="a@x.com", birthdate=date(1970, 1, 1)))
        user_service.create_user(make_user(email="b@x.com", birthdate=date(2000, 1, 1)))

        assert user_service.find_users_born_before(date(2000, 1, 1)) == [older]


class TestDeleteUser:
    def test_delete_then_get(self, user_service: UserService, stored_user: User):
        user_service.delete_user(stored_user.id)

        assert user_service.get_user(stored_user.id) is None
        with pytest.raises(UserNotFoundError):
            user_service.delete_user(stored_user.id)

    def test_delete_missing(self, user_service: UserService):
        with pytest.raises(UserNotFoundError):
            user_service.delete_user(123)
