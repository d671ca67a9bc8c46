import logging
from datetime import datetime, timezone
from fastapi import APIRouter, Depends, HTTPException, Response, status
from sqlalchemy.orm import Session

from traininglog.db import get_db
from traininglog.deps.auth import get_current_user, get_current_user_optional
from traininglog.mailer import send_password_reset_email
from traininglog.models import User
from traininglog.repositories.user_repo import UserRepository
from traininglog.schemas.common import MessageResponse, SuccessResponse
from traininglog.schemas.user import (
    AuthSession,
    ChangePassword,
    ForgotPassword,
    LoginResponse,
    ResetPassword,
    UserLogin,
    UserRead,
    UserSignup,
)
from traininglog.security import (
    SESSION_COOKIE,
    create_session_token,
    generate_reset_token,
    hash_password,
    hash_reset_token,
    reset_token_expiry,
    session_cookie_max_age,
    verify_password,
)
from traininglog.settings import get_settings

log = logging.getLogger("uvicorn")

router = APIRouter(prefix="/api/auth", tags=["auth"])

EMAIL_TAKEN = "An account with this email already exists"
# Same text whether or not the account exists
RESET_REQUESTED = "If an account exists with that email, you'll receive a reset link."

@router.post("/signup", response_model=UserRead)
def signup(payload: UserSignup, db: Session = Depends(get_db)):
    repo = UserRepository(db)
    if repo.get_by_email(payload.email):
        raise HTTPException(status_code=400, detail={"email": [EMAIL_TAKEN]})
    try:
        user = repo.create(
            email=payload.email,
            name=payload.name,
            password_hash=hash_password(payload.password),
        )
    except ValueError as e:
        if str(e) == "email_already_exists":
            raise HTTPException(status_code=400, detail={"email": [EMAIL_TAKEN]})
        raise
    return user

@router.post("/login", response_model=LoginResponse)
def login(payload: UserLogin, response: Response, db: Session = Depends(get_db)):
    user = UserRepository(db).get_by_email(payload.email)
    # one answer for unknown email and wrong password
    if not user or not verify_password(payload.password, user.password_hash):
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid email or password")
    token = create_session_token(user)
    response.set_cookie(
        SESSION_COOKIE,
        token,
        max_age=session_cookie_max_age(),
        httponly=True,
        samesite="lax",
        secure=get_settings().ENV != "local",
    )
    return LoginResponse(access_token=token, user=UserRead.model_validate(user))

@router.post("/logout", response_model=SuccessResponse)
def logout(response: Response):
    response.delete_cookie(SESSION_COOKIE)
    return SuccessResponse()

@router.get("/me", response_model=UserRead)
def me(current_user: User = Depends(get_current_user)):
    return current_user

@router.get("/session", response_model=AuthSession)
def current_session(current_user: User | None = Depends(get_current_user_optional)):
    return AuthSession(user=UserRead.model_validate(current_user) if current_user else None)

@router.post("/forgot-password", response_model=MessageResponse)
def forgot_password(payload: ForgotPassword, db: Session = Depends(get_db)):
    repo = UserRepository(db)
    try:
        user = repo.get_by_email(payload.email)
        if user:
            raw_token, token_hash = generate_reset_token()
            repo.set_reset_token(user, token_hash=token_hash, expires_at=reset_token_expiry())
            base_url = get_settings().APP_BASE_URL.rstrip("/")
            send_password_reset_email(user.email, f"{base_url}/reset-password/{raw_token}")
    except Exception:
        # the response must not reveal whether the account exists or the email went out
        log.exception("Forgot password error")
    return MessageResponse(message=RESET_REQUESTED)

@router.post("/reset-password", response_model=MessageResponse)
def reset_password(payload: ResetPassword, db: Session = Depends(get_db)):
    repo = UserRepository(db)
    user = repo.get_by_reset_token(hash_reset_token(payload.token), now=datetime.now(timezone.utc))
    if not user:
        raise HTTPException(status_code=400, detail="Invalid or expired reset link")
    repo.set_password(user, password_hash=hash_password(payload.password))
    return MessageResponse(message="Password reset successfully")

@router.post("/change-password", response_model=MessageResponse)
def change_password(
    payload: ChangePassword,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    if not verify_password(payload.current_password, current_user.password_hash):
        raise HTTPException(status_code=400, detail={"currentPassword": ["Current password is incorrect"]})
    UserRepository(db).set_password(current_user, password_hash=hash_password(payload.password))
    return MessageResponse(message="Password changed successfully")
