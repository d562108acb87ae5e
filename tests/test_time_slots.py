from __future__ import annotations

import pytest
from pydantic import ValidationError

from app.schemas.time_slot import TimeSlotGenerate
from app.utils.validators import parse_time


def _generate(**overrides) -> TimeSlotGenerate:
    body = {
        'startHour': 9,
        'startMinute': 0,
        'endHour': 11,
        'endMinute': 0,
        'interval': 30,
    }
    body.update(overrides)
    return TimeSlotGenerate.model_validate(body)


def test_slots_cover_half_open_interval() -> None:
    assert _generate().instants() == [(9, 0), (9, 30), (10, 0), (10, 30)]


def test_interval_crossing_hour_boundary() -> None:
    slots = _generate(startMinute=45, endHour=10, endMinute=30, interval=20)

    assert slots.instants() == [(9, 45), (10, 5), (10, 25)]


def test_interval_longer_than_range_gives_single_slot() -> None:
    assert _generate(interval=600).instants() == [(9, 0)]


@pytest.mark.parametrize(
    'overrides',
    [
        {'startHour': 11},
        {'startHour': 12},
        {'interval': 0},
        {'interval': -15},
        {'endHour': 24},
        {'startMinute': 60},
    ],
)
def test_invalid_generation_parameters(overrides: dict) -> None:
    with pytest.raises(ValidationError):
        _generate(**overrides)


@pytest.mark.parametrize(
    ('value', 'expected'),
    [('14:00', (14, 0)), ('9:05', (9, 5)), ('0:0', (0, 0)), ('23:59', (23, 59))],
)
def test_parse_time(value: str, expected: tuple[int, int]) -> None:
    assert parse_time(value) == expected


@pytest.mark.parametrize('value', ['24:00', '12:60', '1200', '', 'noon'])
def test_parse_time_rejects_malformed(value: str) -> None:
    with pytest.raises(ValueError):
        parse_time(value)
