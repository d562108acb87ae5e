from typing import Any

from fastapi import HTTPException, status


def build_error(detail: Any, code: int) -> dict[str, Any]:
    """Формирует унифицированный ответ об ошибке для API."""
    return {'code': code, 'detail': str(detail) if detail is not None else ''}


def http_error(
    detail: Any,
    code: int = status.HTTP_500_INTERNAL_SERVER_ERROR,
) -> HTTPException:
    """Создает HTTPException с унифицированным телом ошибки."""
    return HTTPException(status_code=code, detail=build_error(detail, code))
