from typing import Any

from fastapi import Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from loguru import logger
from starlette.exceptions import HTTPException as StarletteHTTPException

from app.core.exceptions import (
    AppointmentError,
    BadRequestError,
    NotFoundError,
    SlotAlreadyBookedError,
)

ERROR_STATUSES = {
    BadRequestError: status.HTTP_400_BAD_REQUEST,
    NotFoundError: status.HTTP_404_NOT_FOUND,
    SlotAlreadyBookedError: status.HTTP_409_CONFLICT,
}


def _format_error(code: int, detail: Any) -> dict[str, Any]:
    """Форматирует сообщение об ошибке в единый вид."""
    if isinstance(detail, dict):
        detail_code = detail.get('code', code)
        detail_str = detail.get('detail') or detail.get('message')
        if detail_str:
            return {'code': detail_code, 'detail': str(detail_str)}
        return {'code': detail_code, 'detail': str(detail)}
    if isinstance(detail, list):
        detail = '; '.join(str(item) for item in detail)
    return {'code': code, 'detail': str(detail) if detail else ''}


async def validation_exception_handler(
    request: Request,
    exc: RequestValidationError,
) -> JSONResponse:
    """Перехватывает ошибки валидации и возвращает понятные сообщения."""
    messages = [
        error['msg'].replace('Value error, ', '') for error in exc.errors()
    ]
    message = '; '.join(messages) if messages else 'Validation error'
    return JSONResponse(
        status_code=status.HTTP_422_UNPROCESSABLE_CONTENT,
        content=_format_error(status.HTTP_422_UNPROCESSABLE_CONTENT, message),
    )


async def http_exception_handler(
    request: Request,
    exc: StarletteHTTPException,
) -> JSONResponse:
    """Унифицирует формат ответа для HTTP исключений."""
    content = _format_error(exc.status_code, exc.detail)
    return JSONResponse(status_code=exc.status_code, content=content)


async def appointment_exception_handler(
    request: Request,
    exc: AppointmentError,
) -> JSONResponse:
    """Ответ для доменных ошибок, не перехваченных эндпоинтом."""
    code = ERROR_STATUSES.get(
        type(exc),
        status.HTTP_500_INTERNAL_SERVER_ERROR,
    )
    logger.warning(
        f'Доменная ошибка {type(exc).__name__} на {request.url.path}: '
        f'{str(exc)}',
    )
    return JSONResponse(status_code=code, content=_format_error(code, exc))
