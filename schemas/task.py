from pydantic import BaseModel, field_validator, Field
from datetime import datetime
from typing import Optional
from models.task import TaskPriority


class TaskBase(BaseModel):
    title: str = Field(..., max_length=200)
    description: Optional[str] = None
    priority: TaskPriority = TaskPriority.MEDIUM
    due_date: Optional[datetime] = None
    tags: Optional[str] = Field(None, max_length=500)
    attachments: Optional[str] = Field(None, max_length=1000)
    assigned_to: Optional[int] = Field(None, gt=0)

    @field_validator('title')
    @classmethod
    def title_not_empty(cls, v):
        if not v or not v.strip():
            raise ValueError('Title cannot be empty')
        return v.strip()


class TaskCreate(TaskBase):
    """Владелец задачи не принимается от клиента, он всегда равен текущему пользователю"""
    pass


class TaskUpdate(BaseModel):
    """Частичное обновление: поле меняется только если оно передано в теле запроса.

    Переданный ``null`` или пустая строка очищают необязательные поля;
    title, status и priority очистить нельзя.
    """
    title: Optional[str] = Field(None, max_length=200)
    description: Optional[str] = None
    status: Optional[str] = Field(None, max_length=50)
    priority: Optional[TaskPriority] = None
    due_date: Optional[datetime] = None
    tags: Optional[str] = Field(None, max_length=500)
    attachments: Optional[str] = Field(None, max_length=1000)
    assigned_to: Optional[int] = Field(None, gt=0)

    @field_validator('title')
    @classmethod
    def title_not_empty(cls, v):
        if v is None or not v.strip():
            raise ValueError('Title cannot be empty')
        return v.strip()

    @field_validator('status')
    @classmethod
    def status_not_empty(cls, v):
        if v is None or not v.strip():
            raise ValueError('Status cannot be empty')
        return v.strip()

    @field_validator('priority', mode='before')
    @classmethod
    def priority_not_null(cls, v):
        if v is None:
            raise ValueError('Priority must be low, medium or high')
        return v
