import re
from typing import Optional

from email_validator import EmailNotValidError
from email_validator import validate_email as ev_validate

from app.core.constants import MAX_HOUR, MAX_MINUTE, PHONE_PATTERN, TIME_PATTERN


def validate_email(value: Optional[str]) -> Optional[str]:
    """Возвращает читаемое сообщение при некорректном email."""
    if not (value and value.strip()):
        return None

    try:
        ev_validate(value, check_deliverability=False)
    except EmailNotValidError:
        raise ValueError(
            'Enter an email address, for example: user@example.com',
        )
    return value


def validate_phone(value: Optional[str]) -> Optional[str]:
    """Возвращает читаемое сообщение при некорректном номере телефона."""
    if not (value and value.strip()):
        return None

    if not re.fullmatch(PHONE_PATTERN, value):
        raise ValueError('Enter a phone number in the +XXXXXXXXX format')
    return value


def parse_time(value: str) -> tuple[int, int]:
    """Разбирает строку вида HH:MM в пару (час, минута).

    Raises:
        ValueError: если строка не в формате HH:MM или значения вне
            диапазона суток.

    """
    match = re.fullmatch(TIME_PATTERN, value.strip())
    if match is None:
        raise ValueError(f'Invalid time "{value}", expected HH:MM')
    hour, minute = (int(part) for part in match.groups())
    if hour > MAX_HOUR or minute > MAX_MINUTE:
        raise ValueError(f'Invalid time "{value}", expected HH:MM')
    return hour, minute
