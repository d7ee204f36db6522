"""
Project model. A project exclusively owns its tasks.
"""
import uuid

from sqlalchemy import Column, String, Text, DateTime, ForeignKey, CheckConstraint
from sqlalchemy.orm import relationship

from taskify.core.database import Base, utcnow


class Project(Base):
    """User-owned container of tasks."""

    __tablename__ = "projects"
    __table_args__ = (
        CheckConstraint("updated_at >= created_at", name="ck_projects_updated_after_created"),
    )

    # Primary Key
    id = Column(String(64), primary_key=True, default=lambda: uuid.uuid4().hex)

    # Foreign Keys
    user_id = Column(String(64), ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)

    # Project Info
    title = Column(String(500), nullable=False)
    description = Column(Text, nullable=True)

    # Timestamps
    created_at = Column(DateTime, default=utcnow, nullable=False)
    updated_at = Column(DateTime, default=utcnow, nullable=False, index=True)

    # Relationships
    user = relationship("User", back_populates="projects")
    # Deletion is done explicitly in ProjectService.delete_project
    tasks = relationship("Task", back_populates="project", passive_deletes=True)

    def touch(self, now) -> None:
        """Refresh updated_at without ever moving it backwards."""
        current = self.updated_at
        self.updated_at = now if current is None or now > current else current

    def __repr__(self):
        return f"<Project(id={self.id}, title='{self.title}', user_id={self.user_id})>"
