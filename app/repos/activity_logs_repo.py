# app/repos/activity_logs_repo.py

from app.models.activity_logs import AdminLogs, UserLogs
from app.repos.base import BaseRepository


class UserLogsRepository(BaseRepository[UserLogs]):
    """
    Репозиторий журнала действий пользователей.
    """
    def __init__(self) -> None:
        super().__init__(UserLogs)


class AdminLogsRepository(BaseRepository[AdminLogs]):
    """
    Репозиторий журнала действий администраторов.
    """
    def __init__(self) -> None:
        super().__init__(AdminLogs)
