from .availability import AvailabilityRepository, availability_repository
from .base import CRUDBase
from .booking import BookingRepository, booking_repository
from .shop import ShopRepository, shop_repository
from .time_slot import TimeSlotRepository, time_slot_repository
from .user import UserRepository, user_repository

__all__ = [
    'CRUDBase',
    'AvailabilityRepository',
    'availability_repository',
    'BookingRepository',
    'booking_repository',
    'ShopRepository',
    'shop_repository',
    'TimeSlotRepository',
    'time_slot_repository',
    'UserRepository',
    'user_repository',
]
