# traininglog/repositories/user_repo.py
from __future__ import annotations
from datetime import datetime
from typing import Optional

from sqlalchemy import select, func
from sqlalchemy.exc import IntegrityError

from traininglog.models import User
from traininglog.repositories.base import BaseRepository

class UserRepository(BaseRepository[User]):
    model = User

    # READS
    def get_by_email(self, email: str) -> Optional[User]:
        stmt = select(User).where(func.lower(User.email) == email.lower())
        return self.db.execute(stmt).scalar_one_or_none()

    def get_by_reset_token(self, token_hash: str, *, now: datetime) -> Optional[User]:
        """Only a matching AND unexpired token counts."""
        stmt = select(User).where(
            User.reset_token == token_hash,
            User.reset_token_expiry > now,
        )
        return self.db.execute(stmt).scalars().first()

    # WRITES
    def create(self, *, email: str, name: str, password_hash: str) -> User:
        user = User(email=email.lower(), name=name, password_hash=password_hash)
        try:
            return self.add_and_refresh(user)
        except IntegrityError:
            self.db.rollback()
            # Re-raise a clean marker the router maps to 400
            raise ValueError("email_already_exists")

    def set_reset_token(self, user: User, *, token_hash: str, expires_at: datetime) -> User:
        return self.update(user, {"reset_token": token_hash, "reset_token_expiry": expires_at})

    def set_password(self, user: User, *, password_hash: str) -> User:
        # any outstanding reset token is single-use and dies with the old password
        return self.update(
            user,
            {"password_hash": password_hash, "reset_token": None, "reset_token_expiry": None},
        )
