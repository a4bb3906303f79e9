from sqlalchemy.orm import Session
from sqlalchemy import desc
from typing import List, Optional

from models.task import TaskDB, DEFAULT_TASK_STATUS
from models.user import utcnow
from schemas.task import TaskCreate, TaskUpdate


def get_owned_task(db: Session, task_id: int, owner_id: int) -> Optional[TaskDB]:
    """Задача по ID только среди задач владельца.

    Чужая задача и несуществующая неотличимы: в обоих случаях None.
    """
    return db.query(TaskDB).filter(
        TaskDB.id == task_id,
        TaskDB.owner_id == owner_id
    ).first()


def task_to_dict(task: TaskDB) -> dict:
    """Преобразовать объект TaskDB в словарь для сериализации"""
    return {
        "id": task.id,
        "title": task.title,
        "description": task.description,
        "status": task.status,
        "priority": task.priority.value if task.priority else None,
        "due_date": task.due_date,
        "tags": task.tags,
        "attachments": task.attachments,
        "owner_id": task.owner_id,
        "assigned_to": task.assigned_to,
        "created_at": task.created_at,
        "updated_at": task.updated_at,
    }


def get_tasks(db: Session, owner_id: int) -> List[TaskDB]:
    """Все задачи владельца, новые первыми"""
    return db.query(TaskDB).filter(
        TaskDB.owner_id == owner_id
    ).order_by(desc(TaskDB.created_at), desc(TaskDB.id)).all()


def create_task(db: Session, task: TaskCreate, owner_id: int) -> TaskDB:
    """Создать задачу; владелец всегда текущий пользователь"""
    db_task = TaskDB(
        title=task.title,
        description=task.description,
        priority=task.priority,
        due_date=task.due_date,
        tags=task.tags,
        attachments=task.attachments,
        assigned_to=task.assigned_to,
        owner_id=owner_id,
        status=DEFAULT_TASK_STATUS
    )
    db.add(db_task)
    db.commit()
    db.refresh(db_task)
    return db_task


def update_task(db: Session, db_task: TaskDB, task_update: TaskUpdate) -> TaskDB:
    """Применить только переданные поля; остальные не трогаем"""
    update_data = task_update.model_dump(exclude_unset=True)
    for field, value in update_data.items():
        setattr(db_task, field, value)
    db_task.updated_at = utcnow()
    db.commit()
    db.refresh(db_task)
    return db_task


def delete_task(db: Session, db_task: TaskDB) -> None:
    db.delete(db_task)
    db.commit()
