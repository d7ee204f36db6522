"""
Task model. A task has no existence outside its project.
"""
import uuid

from sqlalchemy import Column, String, Text, DateTime, ForeignKey
from sqlalchemy.orm import relationship

from taskify.core.database import Base, utcnow


class Task(Base):
    """Unit of work inside a project, carrying one workflow status."""

    __tablename__ = "tasks"

    # Primary Key
    id = Column(String(64), primary_key=True, default=lambda: uuid.uuid4().hex)

    # Foreign Keys
    project_id = Column(String(64), ForeignKey("projects.id", ondelete="CASCADE"), nullable=False, index=True)
    status_id = Column(String(64), ForeignKey("task_statuses.id", ondelete="RESTRICT"), nullable=False, index=True)

    # Basic Task Info
    title = Column(String(500), nullable=False)
    description = Column(Text, nullable=True)

    # Timestamps
    created_at = Column(DateTime, default=utcnow, nullable=False)
    updated_at = Column(DateTime, default=utcnow, nullable=False)

    # Relationships
    project = relationship("Project", back_populates="tasks")
    status = relationship("TaskStatus", back_populates="tasks")

    def __repr__(self):
        return f"<Task(id={self.id}, title='{self.title[:30]}...', status_id={self.status_id})>"
