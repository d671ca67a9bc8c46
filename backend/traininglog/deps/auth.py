# traininglog/deps/auth.py
from fastapi import Depends, HTTPException, Request, status
from fastapi.security import OAuth2PasswordBearer
from sqlalchemy.orm import Session
from jose.exceptions import ExpiredSignatureError, JWTError

from traininglog.db import get_db
from traininglog.models import User
from traininglog.security import SESSION_COOKIE, decode_token

# Exposes Bearer auth in Swagger; browsers send the cookie instead
oauth2_scheme = OAuth2PasswordBearer(tokenUrl="/api/auth/login", auto_error=False)

def get_token(request: Request, bearer: str | None = Depends(oauth2_scheme)) -> str | None:
    return bearer or request.cookies.get(SESSION_COOKIE)

def get_current_user(
    db: Session = Depends(get_db),
    token: str | None = Depends(get_token),
) -> User:
    unauth = HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail="Unauthorized",
        headers={"WWW-Authenticate": "Bearer"},
    )
    if not token:
        raise unauth
    try:
        payload = decode_token(token)
        sub = payload.get("sub")
        if sub is None:
            raise unauth
        user = db.get(User, int(sub))
    except ExpiredSignatureError:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Token expired",
            headers={"WWW-Authenticate": "Bearer"},
        )
    except (JWTError, ValueError):
        raise unauth

    if not user:
        raise unauth
    return user

def get_current_user_optional(
    db: Session = Depends(get_db),
    token: str | None = Depends(get_token),
) -> User | None:
    """The signed-in user, or None for anonymous callers."""
    try:
        return get_current_user(db=db, token=token)
    except HTTPException:
        return None
