from datetime import datetime
import pytz

from config import HOTEL_TIMEZONE

# Calendar used for every "today" / "this month" computation
HOTEL_TZ = pytz.timezone(HOTEL_TIMEZONE)


def get_hotel_now() -> datetime:
    """Returns current time in Hotel Timezone"""
    return datetime.now(HOTEL_TZ)


def get_utc_now() -> datetime:
    """Naive UTC timestamp, the form stored in DateTime columns"""
    return datetime.now(pytz.utc).replace(tzinfo=None)


def to_hotel_time(dt: datetime) -> datetime:
    """Converts a datetime to Hotel Timezone"""
    if dt.tzinfo is None:
        # Naive timestamps come from the store in UTC
        return pytz.utc.localize(dt).astimezone(HOTEL_TZ)
    return dt.astimezone(HOTEL_TZ)


def get_operational_date() -> str:
    """Returns today's date formatted as YYYY-MM-DD in Hotel Timezone"""
    return get_hotel_now().strftime("%Y-%m-%d")
