from sqlalchemy import Column, Integer, String, DateTime
from sqlalchemy.sql import func
from whitespace_crm.db.session import Base


class User(Base):
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)
    email = Column(String(256), unique=True, index=True, nullable=False)
    first_name = Column(String(128), nullable=True)
    last_name = Column(String(128), nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())

    @property
    def display_name(self) -> str:
        """First/last name when known, else the email, else a generic label."""
        if self.first_name:
            return f"{self.first_name} {self.last_name or ''}".strip()
        return self.email or "A team member"
