from todo_app.services import TaskService, UserService


def get_user_service() -> UserService:
    return UserService()


def get_task_service() -> TaskService:
    return TaskService()
