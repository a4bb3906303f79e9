import enum
from sqlalchemy import Column, Integer, String, DateTime, ForeignKey, Enum, Text
from sqlalchemy.orm import relationship
from database import Base
from models.user import utcnow

DEFAULT_TASK_STATUS = "pending"


class TaskPriority(str, enum.Enum):
    """Приоритеты задач"""
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class TaskDB(Base):
    __tablename__ = "tasks"

    id = Column(Integer, primary_key=True, index=True)
    title = Column(String(200), nullable=False)
    description = Column(Text, nullable=True)
    # Статус - произвольная строка, переходы не проверяются
    status = Column(String(50), nullable=False, default=DEFAULT_TASK_STATUS)
    priority = Column(
        Enum(TaskPriority, values_callable=lambda e: [p.value for p in e]),
        nullable=False,
        default=TaskPriority.MEDIUM,
    )
    due_date = Column(DateTime, nullable=True)
    tags = Column(String(500), nullable=True)
    attachments = Column(String(1000), nullable=True)
    created_at = Column(DateTime, default=utcnow)
    updated_at = Column(DateTime, default=utcnow, onupdate=utcnow)

    owner_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    assigned_to = Column(Integer, ForeignKey("users.id"), nullable=True)

    owner = relationship("UserDB", foreign_keys=[owner_id], back_populates="created_tasks")
    assignee = relationship("UserDB", foreign_keys=[assigned_to], back_populates="assigned_tasks")

    def __repr__(self):
        return f"<Task(id={self.id}, title='{self.title}', status='{self.status}')>"
