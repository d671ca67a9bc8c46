import hashlib
import secrets
from datetime import datetime, timedelta, timezone
from typing import Any, Dict, Optional
from passlib.context import CryptContext
from jose import jwt
from jose.exceptions import JWTError
from traininglog.settings import get_settings

settings = get_settings()
pwd_ctx = CryptContext(schemes=["bcrypt"], deprecated="auto", bcrypt__rounds=settings.BCRYPT_ROUNDS)

def hash_password(p: str) -> str:
    return pwd_ctx.hash(p)

def verify_password(plain: str, hashed: str | None) -> bool:
    if not hashed:
        return False
    return pwd_ctx.verify(plain, hashed)

def create_access_token(
    sub: str,
    *,
    expires_minutes: Optional[int] = None,
    extra: Optional[Dict[str, Any]] = None,
) -> str:
    s = get_settings()
    now = datetime.now(timezone.utc)
    if expires_minutes is None:
        expires_minutes = s.SESSION_MAX_AGE_DAYS * 24 * 60
    exp = now + timedelta(minutes=expires_minutes)
    payload: Dict[str, Any] = {
        "sub": sub,
        "iat": int(now.timestamp()),
        "exp": int(exp.timestamp()),
    }
    if extra:
        payload.update(extra)
    return jwt.encode(payload, s.SECRET_KEY, algorithm=s.ALGORITHM)

def create_session_token(user) -> str:
    """Signed, stateless session token carrying the user's id, email and name."""
    return create_access_token(str(user.id), extra={"email": user.email, "name": user.name})

def decode_token(token: str) -> Dict[str, Any]:
    """
    Verify signature and expiration. Raise if token is expired/invalid.
    """
    s = get_settings()
    payload = jwt.decode(
        token,
        s.SECRET_KEY,
        algorithms=[s.ALGORITHM],
        options={
            "verify_signature": True,
            "verify_exp": True,
        },
    )
    if "exp" not in payload:
        raise JWTError("Missing exp")
    return payload

def hash_reset_token(raw: str) -> str:
    return hashlib.sha256(raw.encode()).hexdigest()

def generate_reset_token() -> tuple[str, str]:
    """Return (raw token for the email link, hash to persist)."""
    raw = secrets.token_hex(32)
    return raw, hash_reset_token(raw)

def reset_token_expiry() -> datetime:
    return datetime.now(timezone.utc) + timedelta(minutes=get_settings().RESET_TOKEN_TTL_MINUTES)

# Cookie that carries the session token for browser requests
SESSION_COOKIE = "session_token"

def session_cookie_max_age() -> int:
    return get_settings().SESSION_MAX_AGE_DAYS * 24 * 60 * 60
