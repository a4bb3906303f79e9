import datetime

import pytest
from sqlalchemy.orm import Session


@pytest.fixture
def owners(db_session: Session):
    """Два пользователя: владелец и посторонний"""
    from models.user import UserDB
    alice = UserDB(username="alice_owner", email="alice@example.com", password_hash="h",
                   first_name="Alice", last_name="Owner")
    bob = UserDB(username="bob_other", email="bob@example.com", password_hash="h",
                 first_name="Bob", last_name="Other")
    db_session.add_all([alice, bob])
    db_session.commit()
    return alice, bob


class TestTaskCRUDFunctions:
    """Тесты для функций из crud/task.py"""

    def test_create_task_defaults(self, db_session: Session, owners):
        from crud.task import create_task
        from schemas.task import TaskCreate
        from models.task import TaskPriority

        alice, _ = owners
        task = create_task(db_session, TaskCreate(title="  Write report  "), owner_id=alice.id)
        assert task.id is not None
        assert task.title == "Write report"
        assert task.status == "pending"
        assert task.priority == TaskPriority.MEDIUM
        assert task.owner_id == alice.id
        assert task.assigned_to is None

    def test_create_task_with_assignee(self, db_session: Session, owners):
        from crud.task import create_task
        from schemas.task import TaskCreate

        alice, bob = owners
        task = create_task(db_session, TaskCreate(title="Review", assigned_to=bob.id), owner_id=alice.id)
        assert task.owner_id == alice.id
        assert task.assigned_to == bob.id
        assert task.assignee.username == "bob_other"
        assert task in bob.assigned_tasks
        assert task in alice.created_tasks

    def test_get_owned_task_is_scoped_by_owner(self, db_session: Session, owners):
        """Чужая задача неотличима от несуществующей"""
        from crud.task import create_task, get_owned_task
        from schemas.task import TaskCreate

        alice, bob = owners
        task = create_task(db_session, TaskCreate(title="Private"), owner_id=alice.id)

        assert get_owned_task(db_session, task.id, alice.id) is not None
        assert get_owned_task(db_session, task.id, bob.id) is None
        assert get_owned_task(db_session, 99999, alice.id) is None

    def test_get_tasks_returns_only_own(self, db_session: Session, owners):
        from crud.task import create_task, get_tasks
        from schemas.task import TaskCreate

        alice, bob = owners
        create_task(db_session, TaskCreate(title="A1"), owner_id=alice.id)
        create_task(db_session, TaskCreate(title="A2"), owner_id=alice.id)
        create_task(db_session, TaskCreate(title="B1", assigned_to=alice.id), owner_id=bob.id)

        alice_tasks = get_tasks(db_session, owner_id=alice.id)
        assert sorted(t.title for t in alice_tasks) == ["A1", "A2"]
        assert [t.title for t in get_tasks(db_session, owner_id=bob.id)] == ["B1"]

    def test_update_task_only_sent_fields(self, db_session: Session, owners):
        from crud.task import create_task, update_task
        from schemas.task import TaskCreate, TaskUpdate
        from models.task import TaskPriority

        alice, _ = owners
        due = datetime.datetime(2030, 1, 1, 12, 0)
        task = create_task(db_session, TaskCreate(
            title="Original", description="Desc", priority="high",
            due_date=due, tags="work", attachments="file.pdf"
        ), owner_id=alice.id)

        updated = update_task(db_session, task, TaskUpdate(title="X"))
        assert updated.title == "X"
        assert updated.description == "Desc"
        assert updated.status == "pending"
        assert updated.priority == TaskPriority.HIGH
        assert updated.due_date == due
        assert updated.tags == "work"
        assert updated.attachments == "file.pdf"

        updated = update_task(db_session, task, TaskUpdate(priority="low"))
        assert updated.priority == TaskPriority.LOW
        assert updated.title == "X"

    def test_update_task_can_clear_fields(self, db_session: Session, owners):
        """Явно переданные пустые значения очищают поля"""
        from crud.task import create_task, update_task
        from schemas.task import TaskCreate, TaskUpdate

        alice, bob = owners
        task = create_task(db_session, TaskCreate(
            title="T", description="Desc", tags="a,b", assigned_to=bob.id
        ), owner_id=alice.id)

        updated = update_task(db_session, task, TaskUpdate(description="", tags=None, assigned_to=None))
        assert updated.description == ""
        assert updated.tags is None
        assert updated.assigned_to is None

    def test_update_task_free_form_status(self, db_session: Session, owners):
        from crud.task import create_task, update_task
        from schemas.task import TaskCreate, TaskUpdate

        alice, _ = owners
        task = create_task(db_session, TaskCreate(title="T"), owner_id=alice.id)
        assert update_task(db_session, task, TaskUpdate(status="blocked on vendor")).status == "blocked on vendor"
        assert update_task(db_session, task, TaskUpdate(status="done")).status == "done"

    def test_delete_task(self, db_session: Session, owners):
        from crud.task import create_task, delete_task, get_owned_task
        from schemas.task import TaskCreate

        alice, _ = owners
        task = create_task(db_session, TaskCreate(title="Temp"), owner_id=alice.id)
        task_id = task.id
        delete_task(db_session, task)
        assert get_owned_task(db_session, task_id, alice.id) is None

    def test_task_to_dict(self, db_session: Session, owners):
        from crud.task import create_task, task_to_dict
        from schemas.task import TaskCreate

        alice, _ = owners
        task = create_task(db_session, TaskCreate(title="Dict", priority="high"), owner_id=alice.id)
        data = task_to_dict(task)
        assert data["priority"] == "high"
        assert data["status"] == "pending"
        assert data["owner_id"] == alice.id
        assert set(data) == {
            "id", "title", "description", "status", "priority", "due_date", "tags",
            "attachments", "owner_id", "assigned_to", "created_at", "updated_at",
        }


class TestTaskSchemas:
    """Проверка входных данных задачи"""

    @pytest.mark.parametrize("payload", [
        {"title": ""},
        {"title": "   "},
        {"title": "T", "priority": "urgent"},
        {"title": "T", "assigned_to": 0},
    ])
    def test_create_rejects_invalid(self, payload):
        from pydantic import ValidationError
        from schemas.task import TaskCreate

        with pytest.raises(ValidationError):
            TaskCreate(**payload)

    def test_create_ignores_client_owner(self):
        from schemas.task import TaskCreate
        task = TaskCreate(title="T", owner_id=42, user_id=42)
        assert "owner_id" not in task.model_dump()

    @pytest.mark.parametrize("payload", [
        {"title": None},
        {"title": ""},
        {"status": None},
        {"status": " "},
        {"priority": None},
        {"priority": "urgent"},
    ])
    def test_update_rejects_clearing_required_fields(self, payload):
        from pydantic import ValidationError
        from schemas.task import TaskUpdate

        with pytest.raises(ValidationError):
            TaskUpdate(**payload)

    def test_update_distinguishes_absent_from_empty(self):
        from schemas.task import TaskUpdate

        assert TaskUpdate().model_dump(exclude_unset=True) == {}
        assert TaskUpdate(description="").model_dump(exclude_unset=True) == {"description": ""}
        assert TaskUpdate(due_date=None).model_dump(exclude_unset=True) == {"due_date": None}
