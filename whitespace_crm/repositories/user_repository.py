"""User repository for database operations."""

from typing import Optional
from sqlalchemy import func
from sqlalchemy.orm import Session

from whitespace_crm.repositories.base_repository import BaseRepository
from whitespace_crm.models.user import User


class UserRepository(BaseRepository[User]):
    """Repository for User model operations."""

    def __init__(self, db: Session):
        super().__init__(User, db)

    def get_by_email(self, email: str) -> Optional[User]:
        """Get user by email, ignoring case."""
        return (
            self.db.query(User)
            .filter(func.lower(User.email) == email.lower())
            .first()
        )
