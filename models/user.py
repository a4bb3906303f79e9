from sqlalchemy import Column, Integer, String, DateTime, Text
from sqlalchemy.orm import relationship
import datetime
from database import Base


def utcnow():
    return datetime.datetime.now(datetime.timezone.utc)


class UserDB(Base):
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)
    username = Column(String(50), unique=True, index=True, nullable=False)
    email = Column(String(255), unique=True, index=True, nullable=False)
    password_hash = Column(String(255), nullable=False)
    first_name = Column(String(100), nullable=False)
    last_name = Column(String(100), nullable=False)
    bio = Column(Text, nullable=True)
    profile_picture = Column(String(500), nullable=True)
    created_at = Column(DateTime, default=utcnow)
    updated_at = Column(DateTime, default=utcnow, onupdate=utcnow)
    last_login = Column(DateTime, nullable=True)

    # Связи: созданные задачи и задачи, где пользователь исполнитель
    created_tasks = relationship("TaskDB", back_populates="owner", foreign_keys="TaskDB.owner_id")
    assigned_tasks = relationship("TaskDB", back_populates="assignee", foreign_keys="TaskDB.assigned_to")

    def __repr__(self):
        return f"<User(id={self.id}, username='{self.username}')>"
