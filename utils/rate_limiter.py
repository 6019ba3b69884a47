"""
Rate limiting
Throttles the sign-in endpoint against brute force attempts
"""
from slowapi import Limiter, _rate_limit_exceeded_handler
from slowapi.util import get_remote_address
from slowapi.errors import RateLimitExceeded

from config import RATE_LIMIT_DEFAULT, RATE_LIMIT_ENABLED, RATE_LIMIT_LOGIN, RATE_LIMIT_STORAGE

limiter = Limiter(
    key_func=get_remote_address,
    default_limits=[RATE_LIMIT_DEFAULT],
    storage_uri=RATE_LIMIT_STORAGE,  # Redis in production
    strategy="fixed-window",
    enabled=RATE_LIMIT_ENABLED,
)

LOGIN_LIMIT = RATE_LIMIT_LOGIN


def setup_rate_limiting(app):
    """Attach the limiter to the FastAPI application"""
    app.state.limiter = limiter
    app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)

    return limiter
