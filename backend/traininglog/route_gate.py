"""
Page route gating.

Runs before every request and only looks at the session token's signature and
expiry, never at the database.

| prefix                                                   | anonymous         | signed in       |
|----------------------------------------------------------|-------------------|-----------------|
| /app/*                                                   | redirect /login   | allow           |
| /login, /signup, /forgot-password, /reset-password/*     | allow             | redirect /app   |
| anything else                                            | allow             | allow           |
"""
from starlette.requests import Request
from jose.exceptions import JWTError

from traininglog.security import SESSION_COOKIE, decode_token

APP_PREFIX = "/app"
LOGIN_PATH = "/login"
AUTH_PREFIXES = ("/login", "/signup", "/forgot-password", "/reset-password")

def _under(path: str, prefix: str) -> bool:
    return path == prefix or path.startswith(prefix + "/")

def gate(path: str, authenticated: bool) -> str | None:
    """Redirect target for a page request, or None to let it through."""
    if _under(path, APP_PREFIX) and not authenticated:
        return LOGIN_PATH
    if authenticated and any(_under(path, p) for p in AUTH_PREFIXES):
        return APP_PREFIX
    return None

def request_token(request: Request) -> str | None:
    auth = request.headers.get("Authorization", "")
    scheme, _, value = auth.partition(" ")
    if scheme.lower() == "bearer" and value:
        return value
    return request.cookies.get(SESSION_COOKIE)

def is_authenticated(request: Request) -> bool:
    token = request_token(request)
    if not token:
        return False
    try:
        decode_token(token)
    except JWTError:
        return False
    return True
