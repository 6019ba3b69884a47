"""
Initialization of the models package.
Exposes every table so SQLAlchemy (Base.metadata) sees them when 'models' is imported.
"""

# 1. Profiles and roles
from .profile import Profile, StaffRole

# 2. Guests
from .guest import Guest

# 3. Rooms
from .room import Room, RoomType, RoomStatus

# 4. Bookings and payments
from .booking import Booking, BookingStatus, Payment, PaymentMethod, PaymentStatus

# 5. Extra services
from .service import Service

# 6. Staff schedules
from .staff import Schedule

# 7. Housekeeping
from .housekeeping import HousekeepingTask, TaskPriority, TaskStatus

__all__ = [
    "Profile", "StaffRole",
    "Guest",
    "Room", "RoomType", "RoomStatus",
    "Booking", "BookingStatus", "Payment", "PaymentMethod", "PaymentStatus",
    "Service",
    "Schedule",
    "HousekeepingTask", "TaskPriority", "TaskStatus",
]
