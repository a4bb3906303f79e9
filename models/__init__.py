from .user import UserDB
from .task import TaskDB, TaskPriority

__all__ = ["UserDB", "TaskDB", "TaskPriority"]
