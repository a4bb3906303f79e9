import logging

from fastapi import APIRouter, Depends, HTTPException, Path, status
from sqlalchemy.orm import Session

from auth import get_current_identity
from database import get_db
from models.task import TaskDB
from schemas.task import TaskCreate, TaskUpdate
from schemas.user import Identity
from schemas.response import StandardResponse
import crud.task as task_crud
import crud.user as user_crud

logger = logging.getLogger(__name__)

# Все маршруты задач требуют проверенного токена
router = APIRouter(
    prefix="/api/tasks",
    tags=["tasks"],
    dependencies=[Depends(get_current_identity)],
)

TASK_NOT_FOUND = "Task not found"


def get_task_or_404(
        task_id: int = Path(..., gt=0, description="Task ID"),
        identity: Identity = Depends(get_current_identity),
        db: Session = Depends(get_db)
) -> TaskDB:
    """Задача текущего пользователя; чужая задача тоже даёт 404"""
    db_task = task_crud.get_owned_task(db, task_id=task_id, owner_id=identity.id)
    if db_task is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=TASK_NOT_FOUND
        )
    return db_task


def _check_assignee(db: Session, user_id):
    if user_id is not None and not user_crud.get_user(db, user_id):
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"User with id {user_id} not found"
        )


@router.post("", response_model=StandardResponse, status_code=status.HTTP_201_CREATED)
def create_task(
        task: TaskCreate,
        identity: Identity = Depends(get_current_identity),
        db: Session = Depends(get_db)
):
    """Создать новую задачу"""
    _check_assignee(db, task.assigned_to)

    task_created = task_crud.create_task(db, task=task, owner_id=identity.id)
    logger.info("User %s created task %s", identity.id, task_created.id)
    return StandardResponse(
        message="Task created successfully",
        data=task_crud.task_to_dict(task_created)
    )


@router.get("", response_model=StandardResponse)
def read_tasks(
        identity: Identity = Depends(get_current_identity),
        db: Session = Depends(get_db)
):
    """Получить все задачи текущего пользователя"""
    tasks = task_crud.get_tasks(db, owner_id=identity.id)
    return StandardResponse(
        message="Tasks retrieved successfully",
        data=[task_crud.task_to_dict(task) for task in tasks]
    )


@router.get("/{task_id}", response_model=StandardResponse)
def read_task(db_task: TaskDB = Depends(get_task_or_404)):
    """Получить задачу по ID"""
    return StandardResponse(
        message="Task retrieved successfully",
        data=task_crud.task_to_dict(db_task)
    )


@router.put("/{task_id}", response_model=StandardResponse)
def update_task(
        task: TaskUpdate,
        db_task: TaskDB = Depends(get_task_or_404),
        identity: Identity = Depends(get_current_identity),
        db: Session = Depends(get_db)
):
    """Обновить задачу"""
    if 'assigned_to' in task.model_fields_set:
        _check_assignee(db, task.assigned_to)

    updated = task_crud.update_task(db, db_task, task)
    logger.info("User %s updated task %s: %s", identity.id, updated.id, sorted(task.model_fields_set))
    return StandardResponse(
        message="Task updated successfully",
        data=task_crud.task_to_dict(updated)
    )


@router.delete("/{task_id}", response_model=StandardResponse)
def delete_task(
        db_task: TaskDB = Depends(get_task_or_404),
        identity: Identity = Depends(get_current_identity),
        db: Session = Depends(get_db)
):
    """Удалить задачу"""
    task_id = db_task.id
    task_crud.delete_task(db, db_task)
    logger.info("User %s deleted task %s", identity.id, task_id)
    return StandardResponse(
        message="Task deleted successfully",
        data=None
    )
