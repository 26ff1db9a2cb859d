from collections.abc import Iterator
from contextlib import contextmanager
from datetime import date

from loguru import logger
from sqlalchemy.exc import IntegrityError
from sqlmodel import Session

from fitness_users.core.errors import (
    DuplicateEmailError,
    InvalidStateError,
    UserNotFoundError,
)
from fitness_users.core.models.user import UserUpdateRequest
from fitness_users.entities.user import User, UserRepository


class UserService:
    """Owns the user invariants: email uniqueness and existence checks.

    Every mutating call runs in its own transaction on the injected session:
    it commits on success and rolls back on any failure.
    """

    def __init__(self, db_session: Session):
        self._user_repo = UserRepository(db_session)
        self._db_session = db_session

    def create_user(self, user: User) -> User:
        """Persist a new user.

        Raises:
            InvalidStateError: if ``user`` already carries an id
            DuplicateEmailError: if another user already has the email
        """
        logger.info("Creating user {}", user)
        if user.id is not None:
            raise InvalidStateError(
                "User has already DB ID, update is not permitted!"
            )

        if self._user_repo.get_by_email(user.email) is not None:
            raise DuplicateEmailError(user.email)

        with self._transaction(user.email):
            created = self._user_repo.create(user)
        logger.info("Created user with ID {}", created.id)
        return created

    def update_user(self, user_id: int, update: UserUpdateRequest) -> User:
        """Apply the non-null fields of ``update`` to an existing user.

        Keeping or re-submitting the user's own email is not a conflict; only
        an email owned by a different user is.

        Raises:
            UserNotFoundError: if no user has ``user_id``
            DuplicateEmailError: if another user already has the new email
        """
        user = self._user_repo.get(user_id)
        if user is None:
            raise UserNotFoundError(user_id)
        logger.info("Updating user {}", user)

        if update.email is not None:
            owner = self._user_repo.get_by_email(update.email)
            if owner is not None and owner.id != user_id:
                raise DuplicateEmailError(update.email)

        updated = user.model_copy(update=update.supplied_fields())
        with self._transaction(updated.email):
            return self._user_repo.update(updated)

    def get_user(self, user_id: int) -> User | None:
        return self._user_repo.get(user_id)

    def get_user_by_email(self, email: str) -> User | None:
        return self._user_repo.get_by_email(email)

    def find_all_users(self) -> list[User]:
        return self._user_repo.list_all()

    def find_users_born_before(self, cutoff: date) -> list[User]:
        return self._user_repo.list_born_before(cutoff)

    def delete_user(self, user_id: int) -> None:
        """Remove a user.

        Raises:
            UserNotFoundError: if no user has ``user_id``
        """
        if self._user_repo.get(user_id) is None:
            raise UserNotFoundError(user_id)

        logger.info("Deleting user with ID {}", user_id)
        with self._transaction():
            self._user_repo.delete(user_id)

    @contextmanager
    def _transaction(self, email: str | None = None) -> Iterator[None]:
        """Commit on clean exit, roll back otherwise.

        A unique-constraint violation here means another writer took the
        email between our check and our write.
        """
        try:
            yield
            self._db_session.commit()
        except IntegrityError as e:
            self._db_session.rollback()
            if email is None:
                raise
            raise DuplicateEmailError(email) from e
        except Exception:
            self._db_session.rollback()
            raise
