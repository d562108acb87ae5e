from __future__ import annotations

import asyncio
import datetime
from types import SimpleNamespace
from unittest.mock import AsyncMock, MagicMock, patch
from uuid import uuid4

import pytest

from app.core.exceptions import NotFoundError
from app.schemas.availability import AvailabilityCreate
from app.services.availability_service import AvailabilityService

SHOP_ID = uuid4()


def _row() -> SimpleNamespace:
    slot_id = uuid4()
    return SimpleNamespace(
        id=uuid4(),
        time_slot_id=slot_id,
        time_slot=SimpleNamespace(
            id=slot_id,
            shop_id=SHOP_ID,
            date=datetime.date(2024, 6, 1),
            hour=14,
            minute=0,
        ),
    )


def _cache(cached=None) -> MagicMock:
    cache = MagicMock()
    cache.get = AsyncMock(return_value=cached)
    cache.set = AsyncMock(return_value=True)
    cache.clear_availability_cache = AsyncMock()
    return cache


def test_availability_is_read_from_db_and_cached() -> None:
    cache = _cache()
    row = _row()
    with (
        patch('app.services.availability_service.shop_repository') as shops,
        patch(
            'app.services.availability_service.availability_repository',
        ) as repo,
    ):
        shops.get_by_id = AsyncMock(return_value=SimpleNamespace(id=SHOP_ID))
        repo.get_multi_by_shop = AsyncMock(return_value=[row])
        result = asyncio.run(
            AvailabilityService.get_shop_availability(
                MagicMock(),
                cache,
                SHOP_ID,
            ),
        )

    assert [a.id for a in result.availability] == [row.id]
    key, value = cache.set.await_args.args
    assert key == f'availability:{SHOP_ID}'
    assert value['shop_id'] == str(SHOP_ID)


def test_cached_availability_skips_db() -> None:
    row = _row()
    cached = {
        'shop_id': str(SHOP_ID),
        'availability': [
            {
                'id': str(row.id),
                'time_slot_id': str(row.time_slot_id),
                'time_slot': {
                    'id': str(row.time_slot.id),
                    'shop_id': str(SHOP_ID),
                    'date': '2024-06-01',
                    'hour': 14,
                    'minute': 0,
                },
            },
        ],
    }
    with patch(
        'app.services.availability_service.availability_repository',
    ) as repo:
        repo.get_multi_by_shop = AsyncMock()
        result = asyncio.run(
            AvailabilityService.get_shop_availability(
                MagicMock(),
                _cache(cached),
                SHOP_ID,
            ),
        )

    repo.get_multi_by_shop.assert_not_awaited()
    assert result.availability[0].time_slot.hour == 14


def test_unknown_shop_is_not_found() -> None:
    with patch('app.services.availability_service.shop_repository') as shops:
        shops.get_by_id = AsyncMock(return_value=None)
        with pytest.raises(NotFoundError):
            asyncio.run(
                AvailabilityService.get_shop_availability(
                    MagicMock(),
                    _cache(),
                    SHOP_ID,
                ),
            )


def test_setting_availability_drops_shop_cache() -> None:
    cache = _cache()
    with (
        patch('app.services.availability_service.shop_repository') as shops,
        patch(
            'app.services.availability_service.availability_repository',
        ) as repo,
    ):
        shops.get_by_id = AsyncMock(return_value=SimpleNamespace(id=SHOP_ID))
        repo.create_for_shop = AsyncMock(return_value=2)
        created = asyncio.run(
            AvailabilityService.set_shop_availability(
                MagicMock(),
                cache,
                SHOP_ID,
                AvailabilityCreate(time_slot_ids=[uuid4(), uuid4()]),
            ),
        )

    assert created == 2
    cache.clear_availability_cache.assert_awaited_once_with(SHOP_ID)


def test_deleting_foreign_availability_is_not_found() -> None:
    cache = _cache()
    with patch(
        'app.services.availability_service.availability_repository',
    ) as repo:
        repo.get_by_id = AsyncMock(
            return_value=SimpleNamespace(id=uuid4(), shop_id=uuid4()),
        )
        repo.delete = AsyncMock()
        with pytest.raises(NotFoundError):
            asyncio.run(
                AvailabilityService.delete_shop_availability(
                    MagicMock(),
                    cache,
                    SHOP_ID,
                    uuid4(),
                ),
            )

    repo.delete.assert_not_awaited()
    cache.clear_availability_cache.assert_not_awaited()


def test_duplicate_time_slots_are_rejected() -> None:
    slot_id = uuid4()

    with pytest.raises(ValueError):
        AvailabilityCreate(time_slot_ids=[slot_id, slot_id])
