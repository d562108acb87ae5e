from uuid import UUID

from fastapi import APIRouter, HTTPException, status

from app.core.db import DbSession
from app.repositories.user import user_repository
from app.schemas.common import ErrorResponse
from app.schemas.user import UserCreate, UserInfo
from app.utils.http import http_error
from app.utils.logging_decorator import event_logger

router = APIRouter(prefix='/users', tags=['Пользователи'])


@router.post(
    '/',
    response_model=UserInfo,
    status_code=status.HTTP_201_CREATED,
    responses={
        status.HTTP_400_BAD_REQUEST: {'model': ErrorResponse},
        status.HTTP_500_INTERNAL_SERVER_ERROR: {'model': ErrorResponse},
    },
)
@event_logger('Создана', 'User')
async def create_user(
    user_data: UserCreate,
    session: DbSession,
) -> UserInfo:
    """Регистрация клиента.

    Нужен хотя бы один контакт: email или телефон.
    """
    try:
        return await user_repository.create(session, user_data)
    except ValueError as e:
        raise http_error(e, status.HTTP_400_BAD_REQUEST)
    except Exception as e:
        raise http_error('Failed to create user') from e


@router.get(
    '/{user_id}',
    response_model=UserInfo,
    responses={
        status.HTTP_404_NOT_FOUND: {'model': ErrorResponse},
        status.HTTP_500_INTERNAL_SERVER_ERROR: {'model': ErrorResponse},
    },
)
async def get_user_by_id(user_id: UUID, session: DbSession) -> UserInfo:
    """Получение информации о пользователе по ID."""
    try:
        user = await user_repository.get(session, id=user_id)
        if not user:
            raise http_error('User not found', status.HTTP_404_NOT_FOUND)
        return user
    except HTTPException:
        raise
    except Exception as e:
        raise http_error('Failed to retrieve user') from e
