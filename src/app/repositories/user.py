from app.models import User
from app.repositories.base import CRUDBase
from app.schemas.user import UserCreate


class UserRepository(CRUDBase[User, UserCreate]):
    """Репозиторий для операций с пользователями."""

    def __init__(self) -> None:
        """Инициализация репозитория пользователей."""
        super().__init__(User)


user_repository = UserRepository()
