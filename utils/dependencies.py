"""
Authentication and authorization dependencies
"""
from typing import Optional
from fastapi import Depends, HTTPException, Request, status
from fastapi.security import OAuth2PasswordBearer
from sqlalchemy.orm import Session

from config import SESSION_COOKIE_NAME
from database import conexion
from database.store import QueryClient
from models import Profile
from utils.access_policy import is_allowed
from utils.auth import verify_token
from utils.logging_utils import log_event
from utils.timezone import get_hotel_now


# The session cookie is preferred; API clients may send a bearer header instead
oauth2_scheme = OAuth2PasswordBearer(tokenUrl="/auth/login", auto_error=False)

LOGIN_PAGE = "/auth/login"
DASHBOARD_PAGE = "/dashboard"


class PageRedirect(Exception):
    """Raised by page guards; the app turns it into a 303 redirect."""

    def __init__(self, location: str):
        super().__init__(location)
        self.location = location


def get_query_client(db: Session = Depends(conexion.get_db)) -> QueryClient:
    return QueryClient(db)


# ========== AUTHENTICATION ==========

async def get_current_user_optional(
    request: Request,
    token: Optional[str] = Depends(oauth2_scheme),
    db: Session = Depends(conexion.get_db)
) -> Optional[Profile]:
    """
    Profile behind the session cookie or bearer token, None when there is no valid session
    """
    raw_token = request.cookies.get(SESSION_COOKIE_NAME) or token
    if not raw_token:
        return None

    try:
        payload = verify_token(raw_token, token_type="access")
    except HTTPException:
        return None

    return db.query(Profile).filter(
        Profile.id == payload.get("user_id"),
        Profile.email == payload.get("sub")
    ).first()


async def get_current_user(
    current_user: Optional[Profile] = Depends(get_current_user_optional)
) -> Profile:
    if current_user is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Not authenticated",
            headers={"WWW-Authenticate": "Bearer"},
        )
    return current_user


# ========== PAGE GUARDS ==========

async def require_login_page(
    current_user: Optional[Profile] = Depends(get_current_user_optional)
) -> Profile:
    if current_user is None:
        raise PageRedirect(LOGIN_PAGE)
    return current_user


def require_page(action: str):
    """
    Page guard for an access policy action

    No session -> /auth/login, session without the action -> /dashboard
    """
    async def guard(current_user: Profile = Depends(require_login_page)) -> Profile:
        if not is_allowed(current_user.role, action, current_user.is_active):
            log_event(
                "auth",
                current_user.email,
                "Page access denied",
                f"role={current_user.role} action={action}"
            )
            raise PageRedirect(DASHBOARD_PAGE)
        return current_user

    return guard


# ========== ACTION GUARDS ==========

def require_action(action: str):
    """
    Dependency for mutation routes: 401 without a session, 403 when the role lacks the action
    """
    async def check_action(current_user: Profile = Depends(get_current_user)) -> Profile:
        if not is_allowed(current_user.role, action, current_user.is_active):
            log_event(
                "auth",
                current_user.email,
                "Unauthorized action attempt",
                f"role={current_user.role} action={action} at={get_hotel_now().isoformat()}"
            )
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail="You do not have permission to perform this action"
            )
        return current_user

    return check_action
