"""
User model. Rows are created by the session provider, never by the core.
"""
import uuid

from sqlalchemy import Column, String, DateTime
from sqlalchemy.orm import relationship

from taskify.core.database import Base, utcnow


class User(Base):
    """Identity owning zero or more projects."""

    __tablename__ = "users"

    id = Column(String(64), primary_key=True, default=lambda: uuid.uuid4().hex)
    email = Column(String(255), unique=True, index=True, nullable=False)
    name = Column(String(255), nullable=True)

    # Timestamps
    created_at = Column(DateTime, default=utcnow, nullable=False)
    updated_at = Column(DateTime, default=utcnow, nullable=False)

    # Relationships
    projects = relationship("Project", back_populates="user", passive_deletes=True)
    sessions = relationship("Session", back_populates="user", passive_deletes=True)

    def __repr__(self):
        return f"<User(id={self.id}, email='{self.email}')>"
