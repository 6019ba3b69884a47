"""
Authentication endpoints: sign up, sign in, sign out and the auth page stubs
"""
from datetime import timedelta
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query, Request, Response, status
from fastapi.responses import RedirectResponse
from fastapi.security import OAuth2PasswordRequestForm
from sqlalchemy.orm import Session
from sqlalchemy.exc import SQLAlchemyError, IntegrityError

from config import (
    ACCESS_TOKEN_EXPIRE_MINUTES, SESSION_COOKIE_NAME, SESSION_COOKIE_SECURE, SIGNUP_REDIRECT_URL
)
from database import conexion
from models import Profile
from schemas.auth import ProfileRead, SignUpRequest, SignUpResponse, Token
from utils.access_policy import capabilities
from utils.auth import create_access_token, get_password_hash, validate_new_password, verify_password
from utils.dependencies import get_current_user, get_current_user_optional, LOGIN_PAGE, DASHBOARD_PAGE
from utils.logging_utils import log_event
from utils.rate_limiter import limiter, LOGIN_LIMIT
from utils.timezone import get_utc_now


router = APIRouter(prefix="/auth", tags=["Authentication"])

SIGN_UP_SUCCESS_PAGE = "/auth/sign-up-success"


def _email_redirect_to(request: Request) -> str:
    return SIGNUP_REDIRECT_URL or f"{request.base_url}dashboard"


# ========== AUTH ENDPOINTS ==========

@router.post("/sign-up", response_model=SignUpResponse, status_code=status.HTTP_201_CREATED)
def sign_up(
    data: SignUpRequest,
    request: Request,
    db: Session = Depends(conexion.get_db)
):
    """
    Creates an account and its profile (role receptionist unless another staff role is chosen)
    """
    valid, errors = validate_new_password(data.password, data.password_confirmation)
    if not valid:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=errors[0])

    try:
        existing = db.query(Profile).filter(Profile.email == data.email).first()
        if existing:
            raise HTTPException(
                status_code=status.HTTP_409_CONFLICT,
                detail="An account with this email already exists"
            )

        profile = Profile(
            email=data.email,
            hashed_password=get_password_hash(data.password),
            first_name=data.first_name.strip(),
            last_name=data.last_name.strip(),
            phone=(data.phone or "").strip() or None,
            role=data.role,
            is_active=True,
        )
        db.add(profile)
        db.commit()
        db.refresh(profile)

        log_event("auth", data.email, "Account created", f"profile_id={profile.id} role={profile.role}")

        return SignUpResponse(
            message="Account created. Please check your email to verify your account.",
            redirect_to=SIGN_UP_SUCCESS_PAGE,
            email_redirect_to=_email_redirect_to(request),
            profile_id=profile.id,
        )

    except HTTPException:
        raise
    except IntegrityError as e:
        db.rollback()
        log_event("auth", data.email, "Integrity error on sign up", f"error={str(e)}")
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail="An account with this email already exists"
        )
    except SQLAlchemyError as e:
        db.rollback()
        log_event("auth", data.email, "Error creating account", f"error={str(e)}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="An error occurred"
        )


@router.post("/login", response_model=Token)
@limiter.limit(LOGIN_LIMIT)
def login(
    request: Request,
    response: Response,
    form_data: OAuth2PasswordRequestForm = Depends(),
    db: Session = Depends(conexion.get_db)
):
    """
    Signs in with e-mail (as username) and password; sets the session cookie
    """
    try:
        profile = db.query(Profile).filter(Profile.email == form_data.username).first()

        if not profile or not profile.hashed_password or not verify_password(form_data.password, profile.hashed_password):
            log_event("auth", form_data.username, "Failed login attempt", "")
            raise HTTPException(
                status_code=status.HTTP_401_UNAUTHORIZED,
                detail="Invalid login credentials",
                headers={"WWW-Authenticate": "Bearer"},
            )

        if not profile.is_active:
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail="Account is deactivated"
            )

        profile.last_login = get_utc_now()
        db.commit()

        access_token = create_access_token(
            data={"sub": profile.email, "user_id": profile.id, "role": profile.role},
            expires_delta=timedelta(minutes=ACCESS_TOKEN_EXPIRE_MINUTES)
        )
        response.set_cookie(
            key=SESSION_COOKIE_NAME,
            value=access_token,
            max_age=ACCESS_TOKEN_EXPIRE_MINUTES * 60,
            httponly=True,
            secure=SESSION_COOKIE_SECURE,
            samesite="lax",
        )

        log_event("auth", profile.email, "Login", f"role={profile.role}")

        return {
            "access_token": access_token,
            "token_type": "bearer",
            "expires_in": ACCESS_TOKEN_EXPIRE_MINUTES * 60  # seconds
        }

    except HTTPException:
        raise
    except SQLAlchemyError as e:
        db.rollback()
        log_event("auth", "system", "Login error", f"error={str(e)}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="An error occurred"
        )


@router.post("/logout")
def logout(current_user: Optional[Profile] = Depends(get_current_user_optional)):
    """Clears the session cookie and sends the browser back to the login page"""
    redirect = RedirectResponse(url=LOGIN_PAGE, status_code=status.HTTP_303_SEE_OTHER)
    redirect.delete_cookie(SESSION_COOKIE_NAME)
    if current_user is not None:
        log_event("auth", current_user.email, "Logout", "")
    return redirect


@router.get("/me")
def me(current_user: Profile = Depends(get_current_user)):
    return {
        "profile": ProfileRead.model_validate(current_user),
        "capabilities": capabilities(current_user.role, current_user.is_active),
    }


# ========== PAGE STUBS ==========

@router.get("/login")
def login_page(current_user: Optional[Profile] = Depends(get_current_user_optional)):
    if current_user is not None:
        return RedirectResponse(url=DASHBOARD_PAGE, status_code=status.HTTP_303_SEE_OTHER)
    return {
        "page": "login",
        "title": "Sign in to your account",
        "submit_to": "/auth/login",
        "sign_up": "/auth/sign-up",
    }


@router.get("/sign-up")
def sign_up_page():
    return {
        "page": "sign-up",
        "title": "Create Account",
        "submit_to": "/auth/sign-up",
        "default_role": "receptionist",
        "login": LOGIN_PAGE,
    }


@router.get("/sign-up-success")
def sign_up_success_page():
    return {
        "page": "sign-up-success",
        "title": "Account Created Successfully!",
        "message": "Please check your email to verify your account",
        "login": LOGIN_PAGE,
    }


@router.get("/error")
def auth_error_page(
    error: Optional[str] = Query(None),
    error_description: Optional[str] = Query(None)
):
    return {
        "page": "auth-error",
        "error": error,
        "error_description": error_description,
        "message": None if error else "An unexpected authentication error occurred. Please try again.",
        "links": {"retry": LOGIN_PAGE, "sign_up": "/auth/sign-up"},
    }
