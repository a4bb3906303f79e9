from .user import (
    get_user,
    get_user_by_username,
    get_user_by_email,
    create_user,
    update_profile,
    record_login,
)

from .task import (
    get_owned_task,
    get_tasks,
    create_task,
    update_task,
    delete_task,
    task_to_dict,
)
