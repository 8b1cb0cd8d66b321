import logging
from typing import Union

from pydantic import SecretStr
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from core.errors import AuthError, InvalidInputError
from core.security import hash_password, verify_password
from models.user import User
from repositories.user_repo import UserRepository

logger = logging.getLogger(__name__)

DUPLICATE_EMAIL_MESSAGE = "User with this email already exists"


class AuthService:
    def __init__(self, db: Session):
        self.db = db
        self.repo = UserRepository(db)

    def register(self, *, email: str, name: str, password: Union[str, SecretStr]) -> User:
        if self.repo.get_by_email(email):
            raise InvalidInputError(DUPLICATE_EMAIL_MESSAGE)
        try:
            return self.repo.create(email=email, name=name, password_hash=hash_password(password))
        except IntegrityError as exc:
            # a concurrent signup took the email after the lookup above
            self.db.rollback()
            logger.info("Signup for an already registered email lost the race")
            raise InvalidInputError(DUPLICATE_EMAIL_MESSAGE) from exc

    def login(self, *, email: str, password: Union[str, SecretStr]) -> User:
        user = self.repo.get_by_email(email)
        if not user or not verify_password(password, user.password_hash):
            raise AuthError("Invalid email or password")
        return user

    def get_user(self, user_id: int) -> User | None:
        return self.repo.get_by_id(user_id)
