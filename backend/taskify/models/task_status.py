"""
Workflow status catalog. Seeded once by migration, read-only afterwards.
"""
import uuid

from sqlalchemy import Column, Integer, String
from sqlalchemy.orm import relationship

from taskify.core.database import Base


class TaskStatus(Base):
    """One workflow state, e.g. Incomplete / In Progress / Done."""

    __tablename__ = "task_statuses"

    id = Column(String(64), primary_key=True, default=lambda: uuid.uuid4().hex)
    name = Column(String(100), unique=True, nullable=False)
    sort_order = Column(Integer, unique=True, nullable=False)

    tasks = relationship("Task", back_populates="status")

    def __repr__(self):
        return f"<TaskStatus(id={self.id}, name='{self.name}', sort_order={self.sort_order})>"
