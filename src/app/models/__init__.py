from .availability import Availability
from .booking import Booking
from .shop import Shop
from .time_slot import TimeSlot
from .user import User

__all__ = [
    'User',
    'Shop',
    'TimeSlot',
    'Availability',
    'Booking',
]
