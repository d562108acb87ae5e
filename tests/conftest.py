import os
from contextlib import asynccontextmanager
from typing import AsyncIterator
from unittest.mock import MagicMock

import pytest
from loguru import logger

# Настройки читаются при импорте app.core.config, поэтому окружение
# задаётся до импорта приложения. Сеть в тестах не используется.
for _key, _value in {
    'POSTGRES_DB': 'appointments_test',
    'POSTGRES_USER': 'postgres',
    'POSTGRES_PASSWORD': 'postgres',
    'POSTGRES_HOST': 'localhost',
    'POSTGRES_PORT': '5432',
    'REDIS_HOST': 'localhost',
    'REDIS_PORT': '6379',
    'REDIS_DB': '0',
    'RABBITMQ_DEFAULT_USER': 'guest',
    'RABBITMQ_DEFAULT_PASS': 'guest',
    'RABBITMQ_DEFAULT_VHOST': '/',
    'RABBITMQ_DEFAULT_HOST': 'localhost',
    'RABBITMQ_DEFAULT_PORT': '5672',
}.items():
    os.environ.setdefault(_key, _value)


@asynccontextmanager
async def fake_session() -> AsyncIterator[MagicMock]:
    yield MagicMock()


@pytest.fixture
def log_messages() -> list[str]:
    messages: list[str] = []
    handler_id = logger.add(
        lambda message: messages.append(message.record['message']),
        level='DEBUG',
    )
    yield messages
    logger.remove(handler_id)
