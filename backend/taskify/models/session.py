"""
Session rows written by the external auth provider.
"""
import uuid

from sqlalchemy import Column, String, DateTime, ForeignKey
from sqlalchemy.orm import relationship

from taskify.core.database import Base, utcnow


class Session(Base):
    """Opaque session token bound to a user until it expires."""

    __tablename__ = "sessions"

    id = Column(String(64), primary_key=True, default=lambda: uuid.uuid4().hex)
    token = Column(String(255), unique=True, index=True, nullable=False)
    user_id = Column(String(64), ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    expires_at = Column(DateTime, nullable=False)
    created_at = Column(DateTime, default=utcnow, nullable=False)

    user = relationship("User", back_populates="sessions")

    def is_expired(self, now) -> bool:
        return self.expires_at <= now

    def __repr__(self):
        return f"<Session(id={self.id}, user_id={self.user_id}, expires_at={self.expires_at})>"
